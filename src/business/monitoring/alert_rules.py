"""
Alert Rules - 预警规则

对一份 MetricsSnapshot 逐条评估预警规则，生成候选预警。
只做阈值判断，不做指标计算。

规则按固定顺序评估（同一轮内先到先得，由 AlertLedger 去重）：

| 规则          | 触发条件                                     | 级别     | 类型        |
|---------------|----------------------------------------------|----------|-------------|
| risk_score    | 风险评分 >= 80                               | critical | risk        |
| risk_score    | 风险评分 >= 60（且未达 80）                  | warning  | risk        |
| margin_usage  | 保证金使用率 >= 80%                          | critical | risk        |
| max_drawdown  | 最大回撤 >= 30%                              | critical | risk        |
| sharpe_ratio  | 夏普比率 < sharpe_low                        | warning  | performance |
| win_rate      | 胜率 < win_rate_low 且交易数 >= min_trades   | warning  | performance |
| overtrading   | 过度交易评分 >= 70                           | warning  | trade       |
| api_latency   | API 延迟 > 5000ms                            | warning  | system      |
| error_rate    | 错误率 > error_rate_high                     | warning  | system      |
"""

from datetime import datetime

from src.business.monitoring.models import Alert, AlertLevel, AlertType, MetricsSnapshot
from src.engine.models.risk import RiskThresholds
from src.engine.risk.scoring import RISK_CRITICAL_THRESHOLD, RISK_HIGH_THRESHOLD

MARGIN_USAGE_CRITICAL = 80.0
MAX_DRAWDOWN_CRITICAL = 30.0
OVERTRADING_WARNING = 70
API_LATENCY_WARNING_MS = 5000.0


def make_alert_id(rule_key: str, raised_at: datetime) -> str:
    """预警 ID：规则键 + 秒级时间戳"""
    return f"{rule_key}_{int(raised_at.timestamp())}"


def _alert(
    rule_key: str,
    alert_type: AlertType,
    level: AlertLevel,
    title: str,
    message: str,
    now: datetime,
) -> Alert:
    return Alert(
        id=make_alert_id(rule_key, now),
        alert_type=alert_type,
        level=level,
        title=title,
        message=message,
        raised_at=now,
    )


def evaluate_alert_rules(
    metrics: MetricsSnapshot,
    thresholds: RiskThresholds,
    now: datetime | None = None,
) -> list[Alert]:
    """评估全部预警规则

    Args:
        metrics: 当前指标快照
        thresholds: 本轮读取的风险阈值
        now: 预警时间，默认当前时间

    Returns:
        按规则顺序排列的候选预警
    """
    now = now or datetime.now()
    alerts: list[Alert] = []

    # 风险预警
    if metrics.risk_score >= RISK_CRITICAL_THRESHOLD:
        alerts.append(_alert(
            "risk_score", AlertType.RISK, AlertLevel.CRITICAL,
            "极高风险警告",
            f"风险评分达到 {metrics.risk_score}/100，建议立即减仓或停止交易",
            now,
        ))
    elif metrics.risk_score >= RISK_HIGH_THRESHOLD:
        alerts.append(_alert(
            "risk_score", AlertType.RISK, AlertLevel.WARNING,
            "高风险警告",
            f"风险评分达到 {metrics.risk_score}/100，建议谨慎交易",
            now,
        ))

    if metrics.margin_usage_rate >= MARGIN_USAGE_CRITICAL:
        alerts.append(_alert(
            "margin_usage", AlertType.RISK, AlertLevel.CRITICAL,
            "保证金使用率过高",
            f"保证金使用率 {metrics.margin_usage_rate:.1f}%，接近强平风险",
            now,
        ))

    if metrics.max_drawdown >= MAX_DRAWDOWN_CRITICAL:
        alerts.append(_alert(
            "max_drawdown", AlertType.RISK, AlertLevel.CRITICAL,
            "最大回撤过大",
            f"最大回撤达到 {metrics.max_drawdown:.1f}%，建议暂停交易",
            now,
        ))

    # 表现预警
    if metrics.sharpe_ratio < thresholds.sharpe_low:
        alerts.append(_alert(
            "sharpe_ratio", AlertType.PERFORMANCE, AlertLevel.WARNING,
            "夏普比率过低",
            f"夏普比率 {metrics.sharpe_ratio:.2f}，策略表现不佳",
            now,
        ))

    if (
        metrics.win_rate < thresholds.win_rate_low
        and metrics.total_trades >= thresholds.min_trades_for_stats
    ):
        alerts.append(_alert(
            "win_rate", AlertType.PERFORMANCE, AlertLevel.WARNING,
            "胜率过低",
            f"胜率仅 {metrics.win_rate:.1f}%，需要优化策略",
            now,
        ))

    # 交易行为预警
    if metrics.overtrading_score >= OVERTRADING_WARNING:
        alerts.append(_alert(
            "overtrading", AlertType.TRADE, AlertLevel.WARNING,
            "过度交易警告",
            f"每小时交易 {metrics.trades_per_hour:.1f} 次，可能存在过度交易",
            now,
        ))

    # 系统预警
    if metrics.api_latency > API_LATENCY_WARNING_MS:
        alerts.append(_alert(
            "api_latency", AlertType.SYSTEM, AlertLevel.WARNING,
            "API延迟过高",
            f"API延迟 {metrics.api_latency:.0f} ms，可能影响交易执行",
            now,
        ))

    if metrics.error_rate > thresholds.error_rate_high:
        alerts.append(_alert(
            "error_rate", AlertType.SYSTEM, AlertLevel.WARNING,
            "系统错误率过高",
            f"错误率 {metrics.error_rate:.1f}%，系统可能存在问题",
            now,
        ))

    return alerts
