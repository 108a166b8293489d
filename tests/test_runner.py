import math
from dataclasses import fields, replace

import pytest

from core.schema import InvestmentStrategy, PlannerInput, TargetType
from engine.buckets import BucketState, resolve_contributions, split_current_portfolio
from engine.runner import INVALID_AGE_ORDER, simulate


def _floats(result):
    return [getattr(result, f.name) for f in fields(result) if isinstance(getattr(result, f.name), float)]


class TestValidation:
    def test_retirement_before_current_age_rejected(self, base_inputs):
        result = simulate(replace(base_inputs, retirement_age=30))
        assert not result.is_valid
        assert result.validation_error == INVALID_AGE_ORDER
        assert result.projections == ()
        assert result.projected_nominal == 0
        assert result.solvency_age is None

    def test_retiring_today_is_allowed(self, base_inputs):
        result = simulate(replace(base_inputs, current_age=65, retirement_age=65))
        assert result.is_valid
        assert result.years_to_retirement == 0
        assert result.projected_nominal == pytest.approx(50000)
        assert result.required_monthly_contribution == 0
        assert len(result.projections) == 26
        assert result.projections[0].age == 65


class TestSeries:
    def test_one_row_per_year_through_life_expectancy(self, base_inputs):
        result = simulate(base_inputs)
        ages = [p.age for p in result.projections]
        assert len(ages) == result.years_to_retirement + result.years_in_retirement + 1
        assert ages[0] == 35 and ages[-1] == 90
        assert all(b - a == 1 for a, b in zip(ages, ages[1:]))

    def test_first_row_is_today(self, base_inputs):
        first = simulate(base_inputs).projections[0]
        assert first.balance_nominal == 50000
        assert first.balance_real == 50000
        assert first.contributions_total == 50000
        assert first.growth_nominal == 0

    def test_retirement_row_matches_headline(self, base_inputs):
        result = simulate(base_inputs)
        row = result.projections[result.years_to_retirement]
        assert row.age == 65
        assert abs(row.balance_nominal - result.projected_nominal) <= 0.5
        assert row.contributions_total == 50000 + 1000 * 360

    def test_reference_line_constant(self, base_inputs):
        result = simulate(base_inputs)
        assert len({p.target_line_nominal for p in result.projections}) == 1


class TestProperties:
    def test_idempotent(self, base_inputs):
        assert simulate(base_inputs) == simulate(base_inputs)

    def test_bucket_sum_equals_gross(self, base_inputs):
        inputs = replace(
            base_inputs, roth_contribution=300, brokerage_contribution=200,
            current_roth_balance=10000, current_brokerage_balance=5000,
        )
        result = simulate(inputs)
        assert result.retirement_buckets.total == pytest.approx(result.projected_nominal)

    @pytest.mark.parametrize("year", [0, 1, 10, 25, 30])
    def test_yearly_snapshot_equals_bucket_sum(self, base_inputs, year):
        inputs = replace(
            base_inputs, roth_contribution=300, brokerage_contribution=200,
            current_roth_balance=10000, current_brokerage_balance=5000,
        )
        result = simulate(inputs)
        state = BucketState.from_amounts(split_current_portfolio(inputs))
        contributions = resolve_contributions(inputs)
        for _ in range(year * 12):
            state.accumulate(0.06 / 12, contributions)
        assert abs(result.projections[year].balance_nominal - state.total) <= 0.5

    def test_more_contribution_never_lowers_balance(self, base_inputs):
        balances = [
            simulate(replace(base_inputs, traditional_contribution=c)).projected_nominal
            for c in (0, 100, 500, 1000, 2000)
        ]
        assert balances == sorted(balances)

    def test_higher_tax_never_raises_income(self, base_inputs):
        incomes = [
            simulate(replace(base_inputs, retirement_tax_rate=t)).projected_income_nominal
            for t in (0, 10, 20, 30, 50, 100)
        ]
        assert incomes == sorted(incomes, reverse=True)

    def test_liquidation_never_exceeds_gross(self, base_inputs):
        inputs = replace(base_inputs, brokerage_contribution=400, roth_contribution=100)
        result = simulate(inputs)
        assert result.projected_after_tax_nominal <= result.projected_nominal

    def test_untaxed_traditional_liquidates_at_gross(self, base_inputs):
        result = simulate(replace(base_inputs, retirement_tax_rate=0))
        assert result.projected_after_tax_nominal == pytest.approx(result.projected_nominal)

    def test_brokerage_gains_reduce_after_tax(self, base_inputs):
        inputs = replace(base_inputs, traditional_contribution=0, brokerage_contribution=1000,
                         retirement_tax_rate=0)
        result = simulate(inputs)
        assert result.projected_after_tax_nominal < result.projected_nominal

    def test_roth_beats_traditional_after_tax(self, base_inputs):
        trad = simulate(base_inputs)
        roth = simulate(replace(base_inputs, traditional_contribution=0, roth_contribution=1000))
        assert roth.projected_nominal == pytest.approx(trad.projected_nominal)
        assert roth.projected_after_tax_nominal > trad.projected_after_tax_nominal

    def test_legacy_contribution_shape_equivalent(self, base_inputs):
        legacy = replace(base_inputs, traditional_contribution=0, monthly_contribution=1000)
        assert simulate(legacy).projected_nominal == pytest.approx(
            simulate(base_inputs).projected_nominal
        )

    def test_zero_growth_is_linear(self, base_inputs):
        inputs = replace(base_inputs, strategy=InvestmentStrategy.CUSTOM, custom_return_rate=0)
        result = simulate(inputs)
        assert result.projected_nominal == pytest.approx(50000 + 1000 * 360)
        assert all(math.isfinite(v) for v in _floats(result))

    def test_full_tax_is_finite_and_depletes_immediately(self, base_inputs):
        result = simulate(replace(base_inputs, retirement_tax_rate=100))
        assert all(math.isfinite(v) for v in _floats(result))
        assert result.projected_after_tax_nominal == 0
        assert result.solvency_age == 65.0

    def test_solvency_age_on_month_grid(self, base_inputs):
        result = simulate(replace(base_inputs, target_value=80000))
        assert result.solvency_age is not None
        months = (result.solvency_age - 65) * 12
        assert months == pytest.approx(round(months))


class TestScenarios:
    def test_on_track_with_pension(self, base_inputs):
        result = simulate(base_inputs)
        assert result.is_valid
        assert result.projected_nominal == pytest.approx(1_305_644, rel=1e-3)
        assert result.projected_income_real == pytest.approx(42_289, rel=1e-2)
        assert result.is_on_track
        assert result.income_gap > 0
        assert result.solvency_age is None
        assert 0 < result.required_monthly_contribution < 1000

    def test_sixty_thousand_goal_falls_short(self, base_inputs):
        result = simulate(replace(base_inputs, target_value=60000))
        assert not result.is_on_track
        assert result.income_gap == pytest.approx(42_289 - 60_000, rel=2e-2)
        assert result.required_monthly_contribution > 1000

    def test_small_contribution_gap(self, base_inputs):
        result = simulate(replace(base_inputs, traditional_contribution=100, target_value=60000))
        assert not result.is_on_track
        assert result.income_gap < 0
        assert result.projected_income_real < result.target_income_real

    def test_depletion_before_life_expectancy(self):
        inputs = PlannerInput(
            current_age=60,
            retirement_age=65,
            life_expectancy=90,
            current_portfolio=200000,
            traditional_contribution=200,
            target_type=TargetType.TOTAL,
            target_value=500000,
            strategy=InvestmentStrategy.CONSERVATIVE,
            inflation_rate=3,
            safe_withdrawal_rate=8,
            retirement_tax_rate=15,
            monthly_pension=2000,
        )
        result = simulate(inputs)
        assert result.solvency_age is not None
        assert 65 < result.solvency_age < 80
        assert not result.is_on_track

    def test_aggressive_withdrawal_rate_depletes(self, base_inputs):
        inputs = replace(
            base_inputs, target_type=TargetType.TOTAL, target_value=1_300_000,
            safe_withdrawal_rate=10,
        )
        result = simulate(inputs)
        assert result.solvency_age is not None
        assert result.solvency_age < inputs.life_expectancy

    def test_total_goal_fills_both_targets(self, base_inputs):
        inputs = replace(base_inputs, target_type=TargetType.TOTAL, target_value=500000)
        result = simulate(inputs)
        assert result.target_nominal == 500000
        assert result.target_real == pytest.approx(500000 / 1.03 ** 30)
        assert result.target_income_real == pytest.approx(
            500000 / 1.03 ** 30 * 0.04 * 0.85 + 24000
        )

    def test_income_goal_targets(self, base_inputs):
        result = simulate(base_inputs)
        assert result.target_income_real == 40000
        assert result.target_income_nominal == pytest.approx(40000 * 1.03 ** 30)
        assert result.target_nominal == pytest.approx(result.target_income_nominal)
