"""
Alert Handlers - 预警处理器

内置处理器：
- LoggingAlertHandler: 写日志
- ChannelAlertHandler: 推送到通知渠道（如 Webhook）
"""

import logging

from src.business.monitoring.handler import AlertHandler, HandlerError
from src.business.monitoring.models import Alert, AlertLevel
from src.business.notification.channels.base import NotificationChannel

logger = logging.getLogger(__name__)

_LEVEL_ORDER = {
    AlertLevel.INFO: 0,
    AlertLevel.WARNING: 1,
    AlertLevel.CRITICAL: 2,
}


class LoggingAlertHandler(AlertHandler):
    """把预警写入日志，critical 用 ERROR，其余用 WARNING"""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def handle(self, alert: Alert) -> None:
        level = logging.ERROR if alert.level == AlertLevel.CRITICAL else logging.WARNING
        self._log.log(
            level,
            f"[{alert.alert_type.value}/{alert.level.value}] {alert.title}: {alert.message}",
        )


class ChannelAlertHandler(AlertHandler):
    """把预警推送到通知渠道"""

    def __init__(
        self,
        channel: NotificationChannel,
        min_level: AlertLevel = AlertLevel.WARNING,
    ) -> None:
        """初始化

        Args:
            channel: 通知渠道
            min_level: 最低推送级别，低于该级别的预警直接跳过
        """
        self.channel = channel
        self.min_level = min_level

    @property
    def name(self) -> str:
        return f"channel:{self.channel.name}"

    def handle(self, alert: Alert) -> None:
        if _LEVEL_ORDER[alert.level] < _LEVEL_ORDER[self.min_level]:
            return

        if not self.channel.is_available:
            raise HandlerError(f"Channel {self.channel.name} is not available")

        result = self.channel.send(
            title=f"[{alert.level.value.upper()}] {alert.title}",
            content=alert.message,
            alert=alert.to_dict(),
        )
        if not result.is_success:
            raise HandlerError(
                f"Channel {self.channel.name} failed to send alert {alert.id}: {result.error}"
            )
