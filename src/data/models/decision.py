"""Decision history data models.

Value types handed over by the decision history store: one
``DecisionRecord`` per AI decision cycle (carrying the account snapshot
taken at that cycle) and the aggregated ``TradePerformance`` statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class DecisionRecord:
    """Account snapshot captured at one decision cycle.

    Attributes:
        timestamp: When the decision cycle ran.
        total_balance: Total account balance (equity) at that cycle.
        margin_used_pct: Margin usage in percent (0-100).
        available_balance: Free balance at that cycle.
        unrealized_pnl: Total unrealized profit/loss of open positions.
        success: Whether the decision cycle completed without error.
        cycle_number: Sequential cycle number within the trader session.
    """

    timestamp: datetime
    total_balance: float
    margin_used_pct: float = 0.0
    available_balance: float = 0.0
    unrealized_pnl: float = 0.0
    success: bool = True
    cycle_number: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DecisionRecord":
        """Create a record from a plain dict (e.g. decoded JSON).

        ``timestamp`` may be a datetime or an ISO-8601 string.
        """
        ts = data["timestamp"]
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)
        return cls(
            timestamp=ts,
            total_balance=float(data["total_balance"]),
            margin_used_pct=float(data.get("margin_used_pct", 0.0)),
            available_balance=float(data.get("available_balance", 0.0)),
            unrealized_pnl=float(data.get("unrealized_pnl", 0.0)),
            success=bool(data.get("success", True)),
            cycle_number=int(data.get("cycle_number", 0)),
        )


@dataclass(frozen=True)
class TradePerformance:
    """Aggregated trade statistics over the most recent trades.

    Attributes:
        total_trades: Number of closed trades analysed.
        win_rate: Winning trades in percent (0-100).
        profit_factor: Gross profit / gross loss.
        sharpe_ratio: Risk-adjusted return (unitless).
    """

    total_trades: int = 0
    win_rate: float = 0.0
    profit_factor: float = 0.0
    sharpe_ratio: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TradePerformance":
        return cls(
            total_trades=int(data.get("total_trades", 0)),
            win_rate=float(data.get("win_rate", 0.0)),
            profit_factor=float(data.get("profit_factor", 0.0)),
            sharpe_ratio=float(data.get("sharpe_ratio", 0.0)),
        )
