"""Composite risk score and trading-frequency scoring."""

from datetime import datetime

from src.engine.models.risk import RiskScores, RiskThresholds

# Score used when there are no records to assess
DEFAULT_RISK_SCORE = 50

# Fixed penalty for a low win rate
WIN_RATE_LOW_SCORE = 10

# Risk level bands
RISK_CRITICAL_THRESHOLD = 80
RISK_HIGH_THRESHOLD = 60
RISK_MEDIUM_THRESHOLD = 40


def calc_risk_score(
    margin_usage: float,
    max_drawdown: float,
    sharpe_ratio: float,
    win_rate: float,
    thresholds: RiskThresholds,
    scores: RiskScores,
) -> int:
    """Calculate the additive composite risk score.

    Each factor contributes at most one tier; a higher tier excludes the
    lower tiers of the same factor. All comparisons are strict.

    | Factor       | Tier                     | Points                  |
    |--------------|--------------------------|-------------------------|
    | Margin usage | > margin_high            | margin_high_score       |
    |              | > margin_medium          | margin_medium_score     |
    | Max drawdown | > drawdown_critical      | drawdown_critical_score |
    |              | > drawdown_high          | drawdown_high_score     |
    |              | > drawdown_medium        | drawdown_medium_score   |
    | Sharpe ratio | < sharpe_low             | sharpe_low_score        |
    |              | < sharpe_poor            | sharpe_poor_score       |
    | Win rate     | < win_rate_low           | 10                      |

    Note:
        The score is reported on a nominal 0-100 scale but is not clamped;
        with custom score weights the sum can exceed 100.

    Args:
        margin_usage: Margin usage of the latest record in percent.
        max_drawdown: Maximum drawdown in percent.
        sharpe_ratio: Sharpe ratio.
        win_rate: Win rate in percent.
        thresholds: Tier thresholds.
        scores: Tier points.

    Returns:
        Non-negative integer risk score.

    Example:
        >>> calc_risk_score(60, 25, 0.5, 50, RiskThresholds(), RiskScores())
        40
    """
    score = 0

    if margin_usage > thresholds.margin_high:
        score += scores.margin_high_score
    elif margin_usage > thresholds.margin_medium:
        score += scores.margin_medium_score

    if max_drawdown > thresholds.drawdown_critical:
        score += scores.drawdown_critical_score
    elif max_drawdown > thresholds.drawdown_high:
        score += scores.drawdown_high_score
    elif max_drawdown > thresholds.drawdown_medium:
        score += scores.drawdown_medium_score

    if sharpe_ratio < thresholds.sharpe_low:
        score += scores.sharpe_low_score
    elif sharpe_ratio < thresholds.sharpe_poor:
        score += scores.sharpe_poor_score

    if win_rate < thresholds.win_rate_low:
        score += WIN_RATE_LOW_SCORE

    return score


def classify_risk_level(risk_score: int) -> str:
    """Map a risk score to its level band.

    Returns:
        "critical" (>= 80), "high" (>= 60), "medium" (>= 40) or "low".
    """
    if risk_score >= RISK_CRITICAL_THRESHOLD:
        return "critical"
    if risk_score >= RISK_HIGH_THRESHOLD:
        return "high"
    if risk_score >= RISK_MEDIUM_THRESHOLD:
        return "medium"
    return "low"


def calc_trades_per_hour(
    total_trades: int,
    first_timestamp: datetime,
    last_timestamp: datetime,
) -> float | None:
    """Calculate trade frequency over the span of the decision records.

    Elapsed time comes from record timestamps, not the wall clock.

    Args:
        total_trades: Number of trades in the window.
        first_timestamp: Timestamp of the oldest record.
        last_timestamp: Timestamp of the newest record.

    Returns:
        Trades per hour.
        Returns None if the span is not positive.

    Example:
        >>> from datetime import timedelta
        >>> t0 = datetime(2025, 1, 1)
        >>> calc_trades_per_hour(6, t0, t0 + timedelta(hours=4))
        1.5
    """
    hours = (last_timestamp - first_timestamp).total_seconds() / 3600
    if hours <= 0:
        return None
    return total_trades / hours


def calc_overtrading_score(trades_per_hour: float) -> int:
    """Band trade frequency into an overtrading score.

    | Trades per hour | Score |
    |-----------------|-------|
    | > 2             | 100   |
    | > 1             | 70    |
    | > 0.5           | 40    |
    | otherwise       | 10    |
    """
    if trades_per_hour > 2:
        return 100
    elif trades_per_hour > 1:
        return 70
    elif trades_per_hour > 0.5:
        return 40
    return 10
