"""
Monitor Commands - 风险监控命令

- snapshot: 执行一轮刷新，输出指标和预警
- watch: 启动后台刷新循环，周期输出状态
"""

import json
import logging
import sys
import time
from datetime import datetime
from typing import Optional

import click

from src.business.config.runtime_config import (
    RuntimeConfigProvider,
    StaticRuntimeConfig,
    YamlRuntimeConfig,
)
from src.business.monitoring.models import Alert, AlertLevel, MetricsSnapshot
from src.business.monitoring.performance_monitor import PerformanceMonitor
from src.business.notification.channels.webhook import WebhookChannel
from src.business.notification.handlers import ChannelAlertHandler, LoggingAlertHandler
from src.data.providers.base import DataAccessError
from src.data.providers.memory_provider import InMemoryDecisionHistory

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_runtime_config(path: Optional[str]) -> RuntimeConfigProvider:
    if path:
        return YamlRuntimeConfig(path)
    default = YamlRuntimeConfig.load()
    if default.path.exists():
        return default
    return StaticRuntimeConfig()


def _build_monitor(
    trader_id: str,
    records: str,
    config: Optional[str],
    interval: float,
) -> PerformanceMonitor:
    history = InMemoryDecisionHistory.from_json(records)
    return PerformanceMonitor(
        trader_id=trader_id,
        history=history,
        runtime_config=_load_runtime_config(config),
        interval=interval,
    )


def _build_monitor_or_exit(
    trader_id: str,
    records: str,
    config: Optional[str],
    interval: float,
) -> PerformanceMonitor:
    """构建监控器，决策记录读取失败时以退出码 3 结束"""
    try:
        return _build_monitor(trader_id, records, config, interval)
    except DataAccessError as e:
        logger.error(f"加载决策记录失败: {e}")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(3)


@click.command()
@click.option(
    "--records",
    "-r",
    type=click.Path(exists=True),
    required=True,
    help="决策记录 JSON 文件路径",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="运行时配置 YAML 路径",
)
@click.option("--trader", "-t", default="default", help="交易员 ID")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="输出格式",
)
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def snapshot(
    records: str,
    config: Optional[str],
    trader: str,
    output: str,
    verbose: bool,
) -> None:
    """执行一轮风险计算并输出结果

    \b
    退出码：
      0 无预警
      1 有 warning 预警
      2 有 critical 预警
      3 读取失败
    """
    _setup_logging(verbose)

    monitor = _build_monitor_or_exit(trader, records, config, interval=0)

    with monitor:
        if not monitor.refresh():
            click.echo("❌ 读取决策历史失败", err=True)
            sys.exit(3)

        metrics = monitor.snapshot()
        alerts = monitor.alerts()

    if output == "json":
        _output_json(metrics, alerts)
    else:
        _output_text(metrics, alerts)

    if any(a.level == AlertLevel.CRITICAL for a in alerts):
        sys.exit(2)
    elif alerts:
        sys.exit(1)
    sys.exit(0)


@click.command()
@click.option(
    "--records",
    "-r",
    type=click.Path(exists=True),
    required=True,
    help="决策记录 JSON 文件路径",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="运行时配置 YAML 路径",
)
@click.option("--trader", "-t", default="default", help="交易员 ID")
@click.option("--interval", "-i", type=float, default=30.0, help="刷新间隔（秒）")
@click.option(
    "--iterations",
    "-n",
    type=int,
    default=0,
    help="刷新轮数后退出，0 表示一直运行",
)
@click.option(
    "--push/--no-push",
    default=False,
    help="是否推送预警到 Webhook",
)
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def watch(
    records: str,
    config: Optional[str],
    trader: str,
    interval: float,
    iterations: int,
    push: bool,
    verbose: bool,
) -> None:
    """启动后台风险监控循环（Ctrl+C 停止）"""
    _setup_logging(verbose)

    monitor = _build_monitor_or_exit(trader, records, config, interval)
    monitor.register_handler(LoggingAlertHandler())
    if push:
        monitor.register_handler(ChannelAlertHandler(WebhookChannel.from_env()))

    click.echo(f"🔍 开始监控 {trader}，间隔 {interval}s")

    with monitor:
        monitor.start()
        seen = 0
        try:
            while iterations <= 0 or monitor.refresh_count < iterations:
                time.sleep(min(interval, 1.0))
                if monitor.refresh_count != seen:
                    seen = monitor.refresh_count
                    status = monitor.status()
                    click.echo(
                        f"[{seen}] 风险评分 {status.risk_score} ({status.risk_level}) | "
                        f"预警 {status.alert_count}"
                    )
        except KeyboardInterrupt:
            click.echo()
        finally:
            monitor.stop()

    click.echo("🛑 监控已停止")


def _output_text(metrics: MetricsSnapshot, alerts: list[Alert]) -> None:
    """文本格式输出"""
    click.echo("📊 风险指标")
    click.echo("-" * 50)
    click.echo(f"   交易数: {metrics.total_trades} | 胜率: {metrics.win_rate:.1f}% | "
               f"盈亏比: {metrics.profit_factor:.2f} | 夏普: {metrics.sharpe_ratio:.2f}")
    click.echo(f"   最大回撤: {metrics.max_drawdown:.2f}% | 当前回撤: {metrics.current_drawdown:.2f}%")
    click.echo(f"   VaR95: {metrics.var_95:.2f} | VaR99: {metrics.var_99:.2f}")
    click.echo(f"   保证金使用率: {metrics.margin_usage_rate:.1f}% | 风险评分: {metrics.risk_score}")
    click.echo(f"   每小时交易: {metrics.trades_per_hour:.2f} | 过度交易评分: {metrics.overtrading_score}")
    click.echo(f"   当前余额: {metrics.current_balance:.2f} | 总盈亏: {metrics.total_pnl:.2f}")
    click.echo()

    if alerts:
        click.echo("📋 预警详情:")
        click.echo("-" * 50)
        for alert in alerts:
            level_icon = {"critical": "🔴", "warning": "🟡", "info": "🔵"}.get(alert.level.value, "⚪")
            click.echo(f"{level_icon} [{alert.alert_type.value}] {alert.title}: {alert.message}")
    else:
        click.echo("✅ 无预警")


def _output_json(metrics: MetricsSnapshot, alerts: list[Alert]) -> None:
    """JSON 格式输出"""
    output_data = {
        "timestamp": datetime.now().isoformat(),
        "metrics": metrics.to_dict(),
        "alerts": [a.to_dict() for a in alerts],
    }
    click.echo(json.dumps(output_data, ensure_ascii=False, indent=2))
