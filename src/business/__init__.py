"""
Business Layer - 业务模块层

交易员风险监控的业务逻辑层，包含：
- monitoring: 风险监控（快照、预警台账、刷新循环）
- notification: 预警推送
- config: 运行时配置
- cli: 命令行工具
"""
