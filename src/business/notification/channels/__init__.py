"""
Notification Channels - 通知渠道

支持的渠道：
- WebhookChannel: 通用 Webhook 推送（可选签名）
"""

from src.business.notification.channels.base import (
    NotificationChannel,
    SendResult,
    SendStatus,
)
from src.business.notification.channels.webhook import WebhookChannel, WebhookConfig

__all__ = [
    "NotificationChannel",
    "SendResult",
    "SendStatus",
    "WebhookChannel",
    "WebhookConfig",
]
