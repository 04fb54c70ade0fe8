"""Abstract base class for decision history providers."""

from abc import ABC, abstractmethod

from src.data.models import DecisionRecord, TradePerformance


class DecisionHistoryProvider(ABC):
    """Abstract base class for decision history sources.

    Implementations read from the trader's decision store; they never
    write to it on behalf of the monitor.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'memory', 'sqlite')."""
        pass

    @abstractmethod
    def analyze_performance(self, limit: int) -> TradePerformance:
        """Aggregate trade statistics over the most recent trades.

        Args:
            limit: Maximum number of trades to analyse.

        Returns:
            TradePerformance for the analysed window.

        Raises:
            DataAccessError: If the store cannot be read.
        """
        pass

    @abstractmethod
    def latest_records(self, limit: int) -> list[DecisionRecord]:
        """Get the most recent decision records.

        Args:
            limit: Maximum number of records to return.

        Returns:
            Records ordered oldest to newest, at most ``limit`` long.

        Raises:
            DataAccessError: If the store cannot be read.
        """
        pass


class DataAccessError(Exception):
    """Decision history could not be read."""

    pass
