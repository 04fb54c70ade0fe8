"""Decision history providers consumed by the risk monitor."""

from src.data.providers.base import DataAccessError, DecisionHistoryProvider
from src.data.providers.memory_provider import InMemoryDecisionHistory

__all__ = [
    "DataAccessError",
    "DecisionHistoryProvider",
    "InMemoryDecisionHistory",
]
