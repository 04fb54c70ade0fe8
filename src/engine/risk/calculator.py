"""Risk calculator over a batch of decision records.

Stateless: compute() maps one batch of records plus the trade performance
aggregate to a RiskComputation. Nothing is cached between calls.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from src.data.models import DecisionRecord, TradePerformance
from src.engine.models.risk import RiskComputation, RiskScores, RiskThresholds
from src.engine.risk.drawdown import calc_current_drawdown, calc_max_drawdown
from src.engine.risk.scoring import (
    DEFAULT_RISK_SCORE,
    calc_overtrading_score,
    calc_risk_score,
    calc_trades_per_hour,
)
from src.engine.risk.var import calc_var


class RiskCalculator:
    """Derives drawdown, VaR, risk score and frequency metrics.

    Usage:
        calc = RiskCalculator()
        result = calc.compute(records, performance, thresholds, scores)
    """

    def compute(
        self,
        records: Sequence[DecisionRecord],
        performance: TradePerformance,
        thresholds: RiskThresholds | None = None,
        scores: RiskScores | None = None,
        now: datetime | None = None,
    ) -> RiskComputation:
        """Compute risk indicators for one batch of records.

        Args:
            records: Decision records ordered oldest to newest.
            performance: Trade statistics for the same refresh cycle.
            thresholds: Risk tier thresholds (defaults if None).
            scores: Risk tier points (defaults if None).
            now: Computation timestamp.

        Returns:
            RiskComputation. With zero records only the trade statistics and
            the default risk score (50) are set.
        """
        thresholds = thresholds or RiskThresholds()
        scores = scores or RiskScores()

        result = RiskComputation(
            total_trades=performance.total_trades,
            win_rate=performance.win_rate,
            profit_factor=performance.profit_factor,
            sharpe_ratio=performance.sharpe_ratio,
            record_count=len(records),
            timestamp=now or datetime.now(),
        )

        if not records:
            result.risk_score = DEFAULT_RISK_SCORE
            return result

        self._fill_risk_metrics(result, records, thresholds, scores)
        self._fill_frequency_metrics(result, records)
        return result

    def _fill_risk_metrics(
        self,
        result: RiskComputation,
        records: Sequence[DecisionRecord],
        thresholds: RiskThresholds,
        scores: RiskScores,
    ) -> None:
        balances = [r.total_balance for r in records]
        latest = records[-1]

        result.max_drawdown = calc_max_drawdown(balances)
        result.current_drawdown = calc_current_drawdown(balances)

        result.current_balance = latest.total_balance
        result.available_balance = latest.available_balance
        result.unrealized_pnl = latest.unrealized_pnl
        result.total_pnl = latest.total_balance - balances[0]
        result.margin_usage_rate = latest.margin_used_pct

        failed = sum(1 for r in records if not r.success)
        result.error_rate = failed / len(records) * 100

        var = calc_var(balances, latest.total_balance)
        if var is not None:
            result.var_95, result.var_99 = var

        result.risk_score = calc_risk_score(
            margin_usage=latest.margin_used_pct,
            max_drawdown=result.max_drawdown,
            sharpe_ratio=result.sharpe_ratio,
            win_rate=result.win_rate,
            thresholds=thresholds,
            scores=scores,
        )

    def _fill_frequency_metrics(
        self,
        result: RiskComputation,
        records: Sequence[DecisionRecord],
    ) -> None:
        if len(records) < 2:
            return

        tph = calc_trades_per_hour(
            result.total_trades,
            records[0].timestamp,
            records[-1].timestamp,
        )
        if tph is None:
            return

        result.trades_per_hour = tph
        result.overtrading_score = calc_overtrading_score(tph)
