"""
Webhook Channel - Webhook 推送渠道

以 JSON POST 方式把预警推送到任意 Webhook（飞书 / 企业微信 / 自建服务）。

支持：
- 可选 HMAC-SHA256 签名（timestamp + secret）
- 最小发送间隔
"""

import base64
import hashlib
import hmac
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Optional

import requests
from dotenv import load_dotenv

from src.business.notification.channels.base import (
    NotificationChannel,
    SendResult,
    SendStatus,
)

logger = logging.getLogger(__name__)


@dataclass
class WebhookConfig:
    """Webhook 配置"""

    url: str
    secret: Optional[str] = None
    timeout: int = 10

    @classmethod
    def from_env(cls) -> "WebhookConfig":
        """从环境变量加载配置"""
        load_dotenv()
        return cls(
            url=os.getenv("RISKMON_WEBHOOK_URL", ""),
            secret=os.getenv("RISKMON_WEBHOOK_SECRET"),
            timeout=int(os.getenv("RISKMON_WEBHOOK_TIMEOUT", "10")),
        )


class WebhookChannel(NotificationChannel):
    """Webhook 推送渠道

    使用方式：
        channel = WebhookChannel.from_env()
        result = channel.send("标题", "内容")
    """

    def __init__(self, config: WebhookConfig, min_interval: float = 1.0) -> None:
        self.config = config
        self._last_send_time: float = 0
        self._min_interval = min_interval

    @classmethod
    def from_env(cls) -> "WebhookChannel":
        return cls(WebhookConfig.from_env())

    @property
    def name(self) -> str:
        return "webhook"

    @property
    def is_available(self) -> bool:
        return bool(self.config.url)

    def _gen_sign(self, timestamp: int) -> str:
        """签名：base64(HMAC-SHA256(key="{timestamp}\\n{secret}", msg=""))"""
        if not self.config.secret:
            return ""

        string_to_sign = f"{timestamp}\n{self.config.secret}"
        hmac_code = hmac.new(
            string_to_sign.encode("utf-8"),
            digestmod=hashlib.sha256,
        ).digest()
        return base64.b64encode(hmac_code).decode("utf-8")

    def _rate_limit(self) -> None:
        elapsed = time.time() - self._last_send_time
        if elapsed < self._min_interval:
            time.sleep(self._min_interval - elapsed)
        self._last_send_time = time.time()

    def send(
        self,
        title: str,
        content: str,
        **kwargs: Any,
    ) -> SendResult:
        """发送消息

        Args:
            title: 消息标题
            content: 消息内容
            **kwargs: ``alert`` 可附带预警的 dict 表示

        Returns:
            SendResult
        """
        if not self.is_available:
            return SendResult(
                status=SendStatus.FAILED,
                error="Webhook URL not configured",
            )

        self._rate_limit()

        payload: dict[str, Any] = {
            "msg_type": "text",
            "content": {"text": f"{title}\n\n{content}"},
        }
        if "alert" in kwargs:
            payload["alert"] = kwargs["alert"]

        if self.config.secret:
            timestamp = int(time.time())
            payload["timestamp"] = str(timestamp)
            payload["sign"] = self._gen_sign(timestamp)

        return self._send_request(payload)

    def _send_request(self, payload: dict[str, Any]) -> SendResult:
        try:
            response = requests.post(
                self.config.url,
                json=payload,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Webhook request failed: {e}")
            return SendResult(status=SendStatus.FAILED, error=str(e))

        if response.status_code != 200:
            return SendResult(
                status=SendStatus.FAILED,
                error=f"HTTP {response.status_code}",
            )

        return SendResult(status=SendStatus.SUCCESS)
