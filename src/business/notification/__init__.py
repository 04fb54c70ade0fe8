"""
Alert Notification - 预警推送

推送渠道和预警处理器：
- channels: 推送渠道 (Webhook 等)
- handlers: 预警处理器 (日志 / 渠道推送)
"""

from src.business.notification.channels.base import NotificationChannel, SendResult
from src.business.notification.handlers import ChannelAlertHandler, LoggingAlertHandler

__all__ = [
    "NotificationChannel",
    "SendResult",
    "ChannelAlertHandler",
    "LoggingAlertHandler",
]
