"""Engine layer data models.

Models:
    RiskThresholds: Risk tier thresholds
    RiskScores: Risk tier points
    RiskComputation: Indicators derived from one batch of decision records
"""

from src.engine.models.risk import RiskComputation, RiskScores, RiskThresholds

__all__ = [
    "RiskComputation",
    "RiskScores",
    "RiskThresholds",
]
