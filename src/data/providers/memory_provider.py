"""In-memory decision history provider.

Holds decision records and trade statistics in process memory. Used by the
CLI (loading a JSON export of the decision store) and by tests.
"""

import json
import logging
from pathlib import Path
from threading import Lock

from src.data.models import DecisionRecord, TradePerformance
from src.data.providers.base import DataAccessError, DecisionHistoryProvider

logger = logging.getLogger(__name__)


class InMemoryDecisionHistory(DecisionHistoryProvider):
    """Decision history kept in memory.

    Records are kept oldest to newest. ``fail_with`` makes every read raise
    ``DataAccessError`` until cleared, for exercising fail-soft behaviour.

    Usage:
        history = InMemoryDecisionHistory.from_json("records.json")
        records = history.latest_records(50)
    """

    def __init__(
        self,
        records: list[DecisionRecord] | None = None,
        performance: TradePerformance | None = None,
    ) -> None:
        self._records: list[DecisionRecord] = sorted(
            records or [], key=lambda r: r.timestamp
        )
        self._performance = performance or TradePerformance()
        self._lock = Lock()
        self.fail_with: str | None = None

    @classmethod
    def from_json(cls, path: str | Path) -> "InMemoryDecisionHistory":
        """Load from a JSON file.

        Expected layout::

            {
              "performance": {"total_trades": 12, "win_rate": 41.6, ...},
              "records": [{"timestamp": "2025-01-01T00:00:00",
                           "total_balance": 1000.0, "margin_used_pct": 12.5}, ...]
            }

        Raises:
            DataAccessError: If the file cannot be read or decoded.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            records = [DecisionRecord.from_dict(r) for r in data.get("records", [])]
            performance = TradePerformance.from_dict(data.get("performance", {}))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise DataAccessError(f"Failed to load decision history from {path}: {e}") from e

        logger.debug(f"Loaded {len(records)} decision records from {path}")
        return cls(records=records, performance=performance)

    @property
    def name(self) -> str:
        return "memory"

    def append(self, record: DecisionRecord) -> None:
        """Append a record (kept in timestamp order)."""
        with self._lock:
            self._records.append(record)
            self._records.sort(key=lambda r: r.timestamp)

    def set_performance(self, performance: TradePerformance) -> None:
        with self._lock:
            self._performance = performance

    def analyze_performance(self, limit: int) -> TradePerformance:
        self._check_available()
        with self._lock:
            return self._performance

    def latest_records(self, limit: int) -> list[DecisionRecord]:
        self._check_available()
        with self._lock:
            if limit <= 0:
                return []
            return list(self._records[-limit:])

    def _check_available(self) -> None:
        if self.fail_with is not None:
            raise DataAccessError(self.fail_with)
