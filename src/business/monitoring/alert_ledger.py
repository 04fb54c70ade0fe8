"""
Alert Ledger - 预警台账

内存中的有序预警列表：
- 插入时去重：同一 (类型, 级别) 已有 Open 预警则丢弃
- 插入时保证 ID 唯一（重复时追加序号）
- 按 ID 解决预警
- 按时间倒序列出

本类不做加锁，由 PerformanceMonitor 的读写锁保护。
"""

from __future__ import annotations

import logging
from datetime import datetime

from src.business.monitoring.models import Alert

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """预警 ID 不存在"""

    pass


class AlertLedger:
    """预警台账

    使用方式：
        ledger = AlertLedger()
        if ledger.admit(alert):
            dispatch(alert)
        ledger.resolve(alert.id)
    """

    def __init__(self) -> None:
        self._alerts: list[Alert] = []

    def __len__(self) -> int:
        return len(self._alerts)

    def admit(self, candidate: Alert) -> bool:
        """尝试加入预警

        加入时若 ID 与台账中已有预警重复（同一秒内同一规则再次触发），
        在 ID 后追加序号，保证每条预警 ID 唯一。

        Args:
            candidate: 候选预警

        Returns:
            True 表示已加入；False 表示已有同类型同级别的 Open 预警，候选被丢弃
        """
        for existing in self._alerts:
            if existing.is_open and existing.dedup_key == candidate.dedup_key:
                logger.debug(
                    f"Alert {candidate.id} suppressed, {existing.id} still open "
                    f"({candidate.alert_type.value}/{candidate.level.value})"
                )
                return False

        candidate.id = self._unique_id(candidate.id)
        self._alerts.append(candidate)
        return True

    def _unique_id(self, alert_id: str) -> str:
        taken = {a.id for a in self._alerts}
        if alert_id not in taken:
            return alert_id
        seq = 2
        while f"{alert_id}_{seq}" in taken:
            seq += 1
        return f"{alert_id}_{seq}"

    def resolve(self, alert_id: str, now: datetime | None = None) -> Alert:
        """解决预警

        已解决的预警保持首次解决时间不变。

        Args:
            alert_id: 预警 ID
            now: 解决时间，默认当前时间

        Returns:
            解决后的预警副本

        Raises:
            NotFoundError: 预警不存在
        """
        for alert in self._alerts:
            if alert.id == alert_id:
                if alert.resolved_at is None:
                    alert.resolved_at = now or datetime.now()
                return alert.copy()

        raise NotFoundError(f"预警 {alert_id} 不存在")

    def list(self, limit: int = 0) -> list[Alert]:
        """按时间倒序列出预警副本

        Args:
            limit: 最多返回条数，<= 0 表示不限制

        Returns:
            预警列表（最新在前；时间相同时后插入的在前）
        """
        ordered = [a.copy() for a in reversed(self._alerts)]
        # reversed() 先把同时间的后插入项放前面，稳定排序保持该顺序
        ordered.sort(key=lambda a: a.raised_at, reverse=True)

        if limit > 0:
            ordered = ordered[:limit]
        return ordered

    def open_alerts(self) -> list[Alert]:
        return [a.copy() for a in self._alerts if a.is_open]
