"""Value at Risk from a balance sequence.

Simplified parametric VaR under a normal-distribution assumption over the
per-step returns of the balance sequence.
"""

import numpy as np

# One-sided normal quantiles
Z_SCORE_95 = 1.645
Z_SCORE_99 = 2.326

# Minimum balance samples for a meaningful Gaussian estimate
MIN_BALANCES_FOR_VAR = 10


def calc_step_returns(balances: list[float]) -> list[float]:
    """Calculate per-step returns of a balance sequence.

    Formula: r_i = (b_i - b_{i-1}) / b_{i-1}

    Steps whose previous balance is zero are skipped.

    Args:
        balances: Account balances ordered oldest to newest.

    Returns:
        List of returns as decimals (one shorter than balances at most).
    """
    if balances is None or len(balances) < 2:
        return []

    returns = []
    for prev, curr in zip(balances[:-1], balances[1:]):
        if prev == 0:
            continue
        returns.append((curr - prev) / prev)
    return returns


def calc_var(
    balances: list[float],
    current_balance: float,
) -> tuple[float, float] | None:
    """Calculate VaR95 and VaR99 in currency units.

    Formula:
        VaR95 = |mean - 1.645 × std| × current_balance
        VaR99 = |mean - 2.326 × std| × current_balance

    mean is the sample mean and std the population standard deviation
    (ddof=0) of the step returns.

    Note:
        The absolute value is applied after subtracting z × std, so with a
        positive mean return VaR95 can exceed VaR99. Callers must not assume
        VaR95 <= VaR99.

    Args:
        balances: Account balances ordered oldest to newest.
        current_balance: Balance the VaR is scaled to (usually the latest).

    Returns:
        (var_95, var_99), both >= 0.
        Returns None if fewer than 10 balance samples.

    Example:
        >>> var_95, var_99 = calc_var([100.0] * 10, 100.0)
        >>> var_95, var_99
        (0.0, 0.0)
    """
    if balances is None or len(balances) < MIN_BALANCES_FOR_VAR:
        return None

    returns = calc_step_returns(balances)
    if not returns:
        return None

    returns_array = np.array(returns, dtype=float)
    mean = float(np.mean(returns_array))
    std = float(np.std(returns_array))

    var_95 = abs(mean - Z_SCORE_95 * std) * current_balance
    var_99 = abs(mean - Z_SCORE_99 * std) * current_balance

    return var_95, var_99
