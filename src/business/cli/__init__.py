"""
Risk Monitor CLI - 风险监控命令行工具

提供命令：
- snapshot: 执行一轮风险计算
- watch: 启动后台监控循环
"""

from src.business.cli.main import cli

__all__ = ["cli"]
