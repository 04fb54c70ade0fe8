"""
Alert Push Channel - 预警推送渠道接口

ChannelAlertHandler 通过该接口把预警推送出去；推送结果以 SendResult 返回，
失败时由处理器转换为 HandlerError。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class SendStatus(str, Enum):
    """推送状态"""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class SendResult:
    """一次推送的结果

    Attributes:
        status: 推送状态
        timestamp: 推送完成时间
        error: 失败原因（HTTP 状态码、网络异常或未配置）
        details: 渠道返回的附加信息
    """

    status: SendStatus
    timestamp: datetime = field(default_factory=datetime.now)
    error: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status == SendStatus.SUCCESS


class NotificationChannel(ABC):
    """预警推送渠道

    实现方只负责投递文本，不做去重和级别过滤（由预警台账和处理器完成）。
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """渠道标识，用于处理器命名和日志"""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """是否已配置可用（如 Webhook URL 非空）"""
        pass

    @abstractmethod
    def send(
        self,
        title: str,
        content: str,
        **kwargs: Any,
    ) -> SendResult:
        """推送一条预警

        Args:
            title: 带级别前缀的预警标题，如 "[CRITICAL] 保证金使用率过高"
            content: 预警正文
            **kwargs: 附加字段，``alert`` 为预警的 dict 表示

        Returns:
            SendResult，失败时不抛异常
        """
        pass
