"""
Pytest fixtures for risk monitoring tests.

Provides in-memory decision history and a deterministic clock so refresh
rounds can be driven by hand.
"""

from datetime import datetime, timedelta

import pytest

from src.business.config.runtime_config import StaticRuntimeConfig
from src.data.models import DecisionRecord, TradePerformance
from src.data.providers.memory_provider import InMemoryDecisionHistory

T0 = datetime(2025, 1, 1, 9, 0)


def build_records(
    balances: list[float],
    margin: float = 10.0,
    step: timedelta = timedelta(hours=1),
) -> list[DecisionRecord]:
    """Decision records one step apart, oldest first."""
    return [
        DecisionRecord(
            timestamp=T0 + step * i,
            total_balance=b,
            margin_used_pct=margin,
            available_balance=b * 0.5,
            cycle_number=i + 1,
        )
        for i, b in enumerate(balances)
    ]


@pytest.fixture
def calm_performance() -> TradePerformance:
    return TradePerformance(total_trades=2, win_rate=60.0, profit_factor=1.8, sharpe_ratio=1.2)


@pytest.fixture
def make_history(calm_performance):
    """Factory: history with the given balances and margin usage."""

    def _make(balances=(1000, 1005, 1010), margin=10.0, performance=None):
        return InMemoryDecisionHistory(
            records=build_records(list(balances), margin=margin),
            performance=performance or calm_performance,
        )

    return _make


@pytest.fixture
def runtime_config() -> StaticRuntimeConfig:
    return StaticRuntimeConfig()


@pytest.fixture
def clock():
    """Clock that advances one minute per call."""
    state = {"now": datetime(2025, 1, 2, 12, 0)}

    def _now() -> datetime:
        state["now"] += timedelta(minutes=1)
        return state["now"]

    return _now
