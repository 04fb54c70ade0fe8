"""Trading risk calculations.

Pure functions over a trader's balance history:
- drawdown: max / current drawdown
- var: Gaussian Value at Risk
- scoring: composite risk score, trade frequency, overtrading band
- calculator: RiskCalculator combining the above for one refresh cycle
"""

from src.engine.risk.calculator import RiskCalculator
from src.engine.risk.drawdown import calc_current_drawdown, calc_max_drawdown
from src.engine.risk.scoring import (
    DEFAULT_RISK_SCORE,
    calc_overtrading_score,
    calc_risk_score,
    calc_trades_per_hour,
    classify_risk_level,
)
from src.engine.risk.var import calc_step_returns, calc_var

__all__ = [
    "RiskCalculator",
    "calc_max_drawdown",
    "calc_current_drawdown",
    "calc_step_returns",
    "calc_var",
    "calc_risk_score",
    "calc_trades_per_hour",
    "calc_overtrading_score",
    "classify_risk_level",
    "DEFAULT_RISK_SCORE",
]
