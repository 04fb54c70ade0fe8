"""Tests for drawdown, VaR and risk scoring calculations."""

import math
import random
import statistics
from datetime import datetime, timedelta

import pytest

from src.engine.models.risk import RiskScores, RiskThresholds
from src.engine.risk import (
    DEFAULT_RISK_SCORE,
    calc_current_drawdown,
    calc_max_drawdown,
    calc_overtrading_score,
    calc_risk_score,
    calc_step_returns,
    calc_trades_per_hour,
    calc_var,
    classify_risk_level,
)


class TestDrawdown:
    """Tests for max / current drawdown."""

    def test_peak_and_trough_scenario(self):
        """Peaks [1000,1200,1200,1200] give drawdowns [0,0,25,20.83]."""
        balances = [1000, 1200, 900, 950]
        assert calc_max_drawdown(balances) == pytest.approx(25.0)
        assert calc_current_drawdown(balances) == pytest.approx(20.8333, abs=1e-3)

    def test_max_drawdown_needs_two_samples(self):
        assert calc_max_drawdown([]) == 0.0
        assert calc_max_drawdown([1000]) == 0.0

    def test_current_drawdown_single_sample(self):
        """A single sample is its own peak."""
        assert calc_current_drawdown([1000]) == 0.0

    def test_current_drawdown_empty(self):
        assert calc_current_drawdown([]) is None

    def test_monotonic_increase_has_no_drawdown(self):
        balances = [100, 110, 120, 130]
        assert calc_max_drawdown(balances) == 0.0
        assert calc_current_drawdown(balances) == 0.0

    def test_max_drawdown_uses_later_peak(self):
        """Drawdown from 120 to 100 (16.67%) beats the earlier 110 to 105."""
        balances = [100, 110, 105, 120, 100, 130]
        assert calc_max_drawdown(balances) == pytest.approx(16.6667, abs=1e-3)
        assert calc_current_drawdown(balances) == 0.0

    def test_max_never_below_current(self):
        """For arbitrary sequences max drawdown >= current drawdown."""
        rng = random.Random(7)
        for _ in range(200):
            n = rng.randint(1, 30)
            balances = [rng.uniform(100, 2000) for _ in range(n)]
            current = calc_current_drawdown(balances)
            assert calc_max_drawdown(balances) + 1e-9 >= current


class TestValueAtRisk:
    """Tests for Gaussian VaR."""

    def test_step_returns(self):
        returns = calc_step_returns([100, 110, 99])
        assert returns == pytest.approx([0.1, -0.1])

    def test_step_returns_skip_zero_base(self):
        assert calc_step_returns([0, 100, 110]) == pytest.approx([0.1])

    def test_skipped_below_ten_samples(self):
        assert calc_var([1000.0] * 9, 1000.0) is None

    def test_flat_balances_have_zero_var(self):
        var_95, var_99 = calc_var([1000.0] * 10, 1000.0)
        assert var_95 == 0.0
        assert var_99 == 0.0

    def test_literal_formula(self):
        """VaR = |mean - z * population std| * current balance."""
        balances = [1000, 1020, 990, 1005, 980, 1010, 1030, 1000, 995, 1025, 1040]
        returns = [(b - a) / a for a, b in zip(balances[:-1], balances[1:])]
        mean = statistics.fmean(returns)
        std = statistics.pstdev(returns)

        var_95, var_99 = calc_var(balances, 1040.0)

        assert var_95 == pytest.approx(abs(mean - 1.645 * std) * 1040.0)
        assert var_99 == pytest.approx(abs(mean - 2.326 * std) * 1040.0)

    def test_var95_can_exceed_var99_with_positive_drift(self):
        """Steady gains (mean 1%, std 0.1%) flip the usual ordering."""
        balances = [1000.0]
        for i in range(10):
            r = 0.009 if i % 2 == 0 else 0.011
            balances.append(balances[-1] * (1 + r))
        current = balances[-1]

        var_95, var_99 = calc_var(balances, current)

        assert var_95 == pytest.approx((0.01 - 1.645 * 0.001) * current, rel=1e-6)
        assert var_99 == pytest.approx((0.01 - 2.326 * 0.001) * current, rel=1e-6)
        assert var_95 > var_99

    def test_var_is_non_negative(self):
        rng = random.Random(11)
        balances = [1000.0]
        for _ in range(20):
            balances.append(balances[-1] * (1 + rng.gauss(0, 0.02)))
        var_95, var_99 = calc_var(balances, balances[-1])
        assert var_95 >= 0
        assert var_99 >= 0


class TestRiskScore:
    """Tests for the additive risk score."""

    @pytest.fixture
    def thresholds(self):
        return RiskThresholds()

    @pytest.fixture
    def scores(self):
        return RiskScores()

    def test_calm_account_scores_zero(self, thresholds, scores):
        assert calc_risk_score(10, 5, 1.2, 55, thresholds, scores) == 0

    def test_higher_tier_excludes_lower(self, thresholds, scores):
        # margin > 50 -> 20 only, not 20 + 10
        assert calc_risk_score(60, 0, 1.0, 50, thresholds, scores) == 20
        # drawdown > 30 -> 30 only
        assert calc_risk_score(0, 35, 1.0, 50, thresholds, scores) == 30
        # sharpe < -0.5 -> 20 only
        assert calc_risk_score(0, 0, -1.0, 50, thresholds, scores) == 20

    def test_tier_boundaries_are_strict(self, thresholds, scores):
        assert calc_risk_score(50, 0, 1.0, 50, thresholds, scores) == 10
        assert calc_risk_score(20, 0, 1.0, 50, thresholds, scores) == 0
        assert calc_risk_score(0, 10, 1.0, 50, thresholds, scores) == 0
        assert calc_risk_score(0, 0, 0.0, 50, thresholds, scores) == 0
        assert calc_risk_score(0, 0, 1.0, 30, thresholds, scores) == 0

    def test_low_win_rate_adds_fixed_points(self, thresholds, scores):
        assert calc_risk_score(0, 0, 1.0, 29.9, thresholds, scores) == 10

    def test_every_factor_worst_case(self, thresholds, scores):
        # 20 + 30 + 20 + 10
        assert calc_risk_score(90, 40, -1.0, 10, thresholds, scores) == 80

    def test_score_is_not_clamped(self, thresholds):
        heavy = RiskScores(
            margin_high_score=50,
            drawdown_critical_score=50,
            sharpe_low_score=50,
        )
        assert calc_risk_score(90, 40, -1.0, 10, thresholds, heavy) == 160

    def test_custom_thresholds(self, scores):
        strict = RiskThresholds(margin_high=5.0, margin_medium=1.0)
        assert calc_risk_score(6, 0, 1.0, 50, strict, scores) == 20

    @pytest.mark.parametrize("factor", ["margin", "drawdown", "inverse_sharpe"])
    def test_monotonic_in_each_factor(self, factor, thresholds, scores):
        """Worsening one factor never lowers the score."""
        previous = -1
        for step in range(0, 101):
            margin, drawdown, sharpe = 10.0, 5.0, 1.0
            if factor == "margin":
                margin = float(step)
            elif factor == "drawdown":
                drawdown = step * 0.5
            else:
                sharpe = 2.0 - step * 0.04
            score = calc_risk_score(margin, drawdown, sharpe, 50, thresholds, scores)
            assert score >= previous
            previous = score

    def test_default_score_is_midpoint(self):
        assert DEFAULT_RISK_SCORE == 50

    @pytest.mark.parametrize(
        "score,level",
        [(0, "low"), (39, "low"), (40, "medium"), (60, "high"), (80, "critical"), (130, "critical")],
    )
    def test_classify_risk_level(self, score, level):
        assert classify_risk_level(score) == level


class TestTradingFrequency:
    """Tests for trades per hour and the overtrading band."""

    def test_trades_per_hour_from_record_span(self):
        t0 = datetime(2025, 1, 1, 9, 0)
        assert calc_trades_per_hour(6, t0, t0 + timedelta(hours=4)) == pytest.approx(1.5)

    def test_zero_span(self):
        t0 = datetime(2025, 1, 1, 9, 0)
        assert calc_trades_per_hour(6, t0, t0) is None

    @pytest.mark.parametrize(
        "tph,score",
        [(3.0, 100), (2.01, 100), (2.0, 70), (1.5, 70), (1.0, 40), (0.6, 40), (0.5, 10), (0.0, 10)],
    )
    def test_overtrading_bands(self, tph, score):
        assert calc_overtrading_score(tph) == score

    def test_bands_are_discrete(self):
        for i in range(0, 500):
            assert calc_overtrading_score(i / 100) in (10, 40, 70, 100)
        assert not math.isnan(calc_overtrading_score(0.0))
