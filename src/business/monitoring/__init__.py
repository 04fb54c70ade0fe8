"""
Trader Risk Monitor - 交易员风险监控

组成：
1. RiskCalculator（engine 层）- 回撤 / VaR / 风险评分 / 交易频率
2. AlertLedger - 预警台账（插入去重、按 ID 解决）
3. PerformanceMonitor - 周期刷新、状态所有权、预警分发
"""

from src.business.monitoring.alert_ledger import AlertLedger, NotFoundError
from src.business.monitoring.alert_rules import evaluate_alert_rules
from src.business.monitoring.handler import (
    AlertHandler,
    CallableAlertHandler,
    HandlerError,
)
from src.business.monitoring.models import (
    Alert,
    AlertLevel,
    AlertType,
    MetricsSnapshot,
    MonitorStatus,
)
from src.business.monitoring.performance_monitor import PerformanceMonitor

__all__ = [
    "Alert",
    "AlertHandler",
    "AlertLedger",
    "AlertLevel",
    "AlertType",
    "CallableAlertHandler",
    "HandlerError",
    "MetricsSnapshot",
    "MonitorStatus",
    "NotFoundError",
    "PerformanceMonitor",
    "evaluate_alert_rules",
]
