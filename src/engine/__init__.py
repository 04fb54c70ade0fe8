"""Calculation Engine Layer.

Derives trading-risk indicators from a trader's decision history. It takes
raw records from the data layer and outputs metrics for the business layer,
which only performs threshold checks on them.

Architecture:
- risk/: Risk calculations over a balance sequence
    - drawdown: Max and current drawdown
    - var: Value at Risk (Gaussian approximation)
    - scoring: Composite risk score, trade frequency, overtrading band
    - calculator: RiskCalculator for one refresh cycle

- models/: Threshold/score containers and computation results
"""
