"""Risk scoring data models.

Threshold and score-weight containers consumed by the risk scoring
functions, and the result of one risk computation pass. Defaults mirror
the trading desk's standard risk policy; live values come from the runtime
configuration at every refresh.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class RiskThresholds:
    """Risk thresholds (percent values are 0-100).

    Attributes:
        margin_high: Margin usage above which the high tier applies.
        margin_medium: Margin usage above which the medium tier applies.
        drawdown_critical: Max drawdown above which the critical tier applies.
        drawdown_high: Max drawdown above which the high tier applies.
        drawdown_medium: Max drawdown above which the medium tier applies.
        sharpe_low: Sharpe ratio below which performance is very poor.
        sharpe_poor: Sharpe ratio below which there is no risk-adjusted return.
        win_rate_low: Win rate below which the win-rate penalty applies.
        error_rate_high: Decision error rate above which a system alert fires.
        min_trades_for_stats: Minimum trades before win rate is trusted.
    """

    margin_high: float = 50.0
    margin_medium: float = 20.0
    drawdown_critical: float = 30.0
    drawdown_high: float = 20.0
    drawdown_medium: float = 10.0
    sharpe_low: float = -0.5
    sharpe_poor: float = 0.0
    win_rate_low: float = 30.0
    error_rate_high: float = 10.0
    min_trades_for_stats: int = 10


@dataclass(frozen=True)
class RiskScores:
    """Points contributed by each risk tier."""

    margin_high_score: int = 20
    margin_medium_score: int = 10
    drawdown_critical_score: int = 30
    drawdown_high_score: int = 20
    drawdown_medium_score: int = 10
    sharpe_low_score: int = 20
    sharpe_poor_score: int = 10


@dataclass
class RiskComputation:
    """Indicators derived from one batch of decision records.

    Pure data container filled by RiskCalculator.compute(). Fields left as
    None had too few samples to compute; the caller keeps its prior value
    for those.
    """

    # Trade statistics (passed through from the performance aggregate)
    total_trades: int = 0
    win_rate: float = 0.0
    profit_factor: float = 0.0
    sharpe_ratio: float = 0.0

    # Drawdown
    max_drawdown: float | None = None
    current_drawdown: float | None = None

    # Risk
    var_95: float | None = None
    var_99: float | None = None
    risk_score: int = 50
    margin_usage_rate: float | None = None

    # Live state
    current_balance: float | None = None
    available_balance: float | None = None
    unrealized_pnl: float | None = None
    total_pnl: float | None = None

    # Frequency
    trades_per_hour: float | None = None
    overtrading_score: int | None = None

    # System health
    error_rate: float | None = None

    record_count: int = 0
    timestamp: datetime = field(default_factory=datetime.now)
