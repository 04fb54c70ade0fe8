"""
Alert Handler - 预警处理器接口

监控器每新增一条预警，就把它交给所有已注册的处理器（各自独立执行）。
处理失败抛出 HandlerError，由监控器记录日志，不影响其他处理器和刷新循环。
具体处理器见 src.business.notification.handlers。
"""

from abc import ABC, abstractmethod
from typing import Callable

from src.business.monitoring.models import Alert


class HandlerError(Exception):
    """预警处理失败"""

    pass


class AlertHandler(ABC):
    """预警处理器基类"""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def handle(self, alert: Alert) -> None:
        """处理一条预警

        Raises:
            HandlerError: 处理失败
        """
        pass


class CallableAlertHandler(AlertHandler):
    """把 ``fn(alert)`` 包装成处理器"""

    def __init__(self, fn: Callable[[Alert], None], name: str | None = None) -> None:
        self._fn = fn
        self._name = name or getattr(fn, "__name__", "callable")

    @property
    def name(self) -> str:
        return self._name

    def handle(self, alert: Alert) -> None:
        self._fn(alert)


def as_handler(handler: AlertHandler | Callable[[Alert], None]) -> AlertHandler:
    """接受处理器实例或普通函数，统一成 AlertHandler"""
    if isinstance(handler, AlertHandler):
        return handler
    if callable(handler):
        return CallableAlertHandler(handler)
    raise TypeError(f"Not an alert handler: {handler!r}")
