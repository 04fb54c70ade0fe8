"""Drawdown calculations over a balance sequence."""


def calc_max_drawdown(balances: list[float]) -> float:
    """Calculate maximum drawdown from a balance sequence.

    Single forward pass tracking a running peak.

    Formula: Drawdown_i = (Peak_i - Balance_i) / Peak_i × 100

    Args:
        balances: Account balances ordered oldest to newest.

    Returns:
        Maximum drawdown in percent (e.g., 25.0 for a 25% drawdown).
        Returns 0 for fewer than 2 samples.

    Example:
        >>> calc_max_drawdown([1000, 1200, 900, 950])
        25.0
    """
    if balances is None or len(balances) < 2:
        return 0.0

    max_drawdown = 0.0
    peak = balances[0]

    for balance in balances:
        if balance > peak:
            peak = balance

        if peak > 0:
            drawdown = (peak - balance) / peak * 100
            if drawdown > max_drawdown:
                max_drawdown = drawdown

    return max_drawdown


def calc_current_drawdown(balances: list[float]) -> float | None:
    """Calculate drawdown of the latest balance from the running peak.

    Uses the same peak as calc_max_drawdown(), so the result never
    exceeds the maximum drawdown of the same sequence.

    Args:
        balances: Account balances ordered oldest to newest.

    Returns:
        Current drawdown in percent.
        Returns None if the sequence is empty or the peak is not positive.

    Example:
        >>> round(calc_current_drawdown([1000, 1200, 900, 950]), 2)
        20.83
    """
    if not balances:
        return None

    peak = max(balances)
    if peak <= 0:
        return None

    return (peak - balances[-1]) / peak * 100
