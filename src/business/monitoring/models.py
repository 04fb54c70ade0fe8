"""
Monitoring Models - 风险监控数据模型

定义风险监控的核心数据结构：
- AlertType / AlertLevel: 预警分类与级别
- Alert: 预警信息（Open → Resolved）
- MetricsSnapshot: 某一轮刷新计算出的全部指标
- MonitorStatus: 监控器状态摘要
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class AlertLevel(str, Enum):
    """预警级别"""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class AlertType(str, Enum):
    """预警类型"""

    RISK = "risk"  # 风险（评分、保证金、回撤）
    PERFORMANCE = "performance"  # 表现（夏普、胜率）
    SYSTEM = "system"  # 系统（延迟、错误率）
    TRADE = "trade"  # 交易行为（过度交易）


@dataclass
class Alert:
    """预警信息

    生命周期：Open（resolved_at 为空）→ Resolved（终态，不会重新打开）。
    """

    id: str
    alert_type: AlertType
    level: AlertLevel
    title: str
    message: str
    raised_at: datetime = field(default_factory=datetime.now)
    resolved_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.resolved_at is None

    @property
    def dedup_key(self) -> tuple[AlertType, AlertLevel]:
        """去重键：同一 (类型, 级别) 同时只允许一条 Open 预警"""
        return (self.alert_type, self.level)

    def copy(self) -> "Alert":
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.alert_type.value,
            "level": self.level.value,
            "title": self.title,
            "message": self.message,
            "raised_at": self.raised_at.isoformat(),
            "resolved": not self.is_open,
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None,
        }


@dataclass
class MetricsSnapshot:
    """性能与风险指标快照

    所有字段来自同一轮刷新取到的同一批记录，由监控器整体替换。
    百分比字段单位均为 %（0-100）。
    """

    # === 交易统计 ===
    total_trades: int = 0
    win_rate: float = 0.0
    profit_factor: float = 0.0
    sharpe_ratio: float = 0.0

    # === 回撤 ===
    max_drawdown: float = 0.0
    current_drawdown: float = 0.0

    # === 风险 ===
    var_95: float = 0.0
    var_99: float = 0.0
    risk_score: int = 0  # 名义 0-100，不截断
    margin_usage_rate: float = 0.0
    liquidation_risk: float = 0.0  # 距离强平的百分比

    # === 实时状态 ===
    current_balance: float = 0.0
    available_balance: float = 0.0
    unrealized_pnl: float = 0.0
    total_pnl: float = 0.0

    # === 交易频率 ===
    trades_per_hour: float = 0.0
    avg_holding_time: float = 0.0  # 分钟
    overtrading_score: int = 0  # 10/40/70/100

    # === 系统健康 ===
    api_latency: float = 0.0  # 毫秒
    decision_latency: float = 0.0  # 毫秒
    error_rate: float = 0.0
    system_uptime: float = 0.0  # 小时

    last_updated: Optional[datetime] = None

    def copy(self) -> "MetricsSnapshot":
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["last_updated"] = self.last_updated.isoformat() if self.last_updated else None
        return data


@dataclass(frozen=True)
class MonitorStatus:
    """监控器状态摘要（供外部轮询）"""

    enabled: bool
    trader_id: str
    last_updated: Optional[datetime]
    alert_count: int
    risk_score: int
    risk_level: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "trader_id": self.trader_id,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "alerts_count": self.alert_count,
            "risk_score": self.risk_score,
            "risk_level": self.risk_level,
        }
