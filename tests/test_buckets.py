import pytest

from core.schema import BucketAmounts, PlannerInput
from engine.buckets import (
    WITHDRAWAL_ORDER,
    BucketState,
    resolve_contributions,
    split_current_portfolio,
)


def _inputs(**kwargs) -> PlannerInput:
    return PlannerInput(current_age=40, retirement_age=65, life_expectancy=90, **kwargs)


class TestContributionRouting:
    def test_granular_fields_win(self):
        c = resolve_contributions(
            _inputs(traditional_contribution=500, roth_contribution=200, monthly_contribution=1000)
        )
        assert c == BucketAmounts(traditional=500, roth=200, brokerage=0)

    def test_legacy_split(self):
        c = resolve_contributions(_inputs(monthly_contribution=1000, monthly_roth_contribution=300))
        assert c == BucketAmounts(traditional=700, roth=300, brokerage=0)

    def test_legacy_roth_portion_capped(self, caplog):
        with caplog.at_level("WARNING"):
            c = resolve_contributions(
                _inputs(monthly_contribution=1000, monthly_roth_contribution=1500)
            )
        assert c == BucketAmounts(traditional=0, roth=1000, brokerage=0)
        assert "capping" in caplog.text

    def test_nothing_contributed(self):
        assert resolve_contributions(_inputs()).total == 0


class TestPortfolioSplit:
    def test_remainder_is_traditional(self):
        split = split_current_portfolio(
            _inputs(current_portfolio=100000, current_roth_balance=30000,
                    current_brokerage_balance=20000)
        )
        assert split == BucketAmounts(traditional=50000, roth=30000, brokerage=20000)

    def test_portions_clamped_to_total(self):
        split = split_current_portfolio(
            _inputs(current_portfolio=100000, current_roth_balance=120000,
                    current_brokerage_balance=50000)
        )
        assert split.roth == 100000
        assert split.brokerage == 0
        assert split.traditional == 0
        assert split.total == 100000


class TestWithdrawal:
    def test_order_is_fixed(self):
        assert WITHDRAWAL_ORDER == ("traditional", "brokerage", "roth")

    def test_traditional_drained_first_with_gross_up(self):
        state = BucketState(traditional=1000, roth=1000, brokerage=1000, brokerage_basis=1000)
        unmet = state.withdraw(850, tax_rate=0.15, capital_gains_rate=0.15)
        assert unmet == 0
        assert state.traditional == pytest.approx(0, abs=1e-9)
        assert state.brokerage == 1000
        assert state.roth == 1000

    def test_brokerage_taxes_only_gains_and_reduces_basis(self):
        state = BucketState(traditional=0, roth=500, brokerage=2000, brokerage_basis=1000)
        unmet = state.withdraw(900, tax_rate=0.15, capital_gains_rate=0.2)
        assert unmet == 0
        # half the balance is gain: net factor 0.9, so 1000 gross
        assert state.brokerage == pytest.approx(1000)
        assert state.brokerage_basis == pytest.approx(500)
        assert state.unrealized_gain_ratio == pytest.approx(0.5)
        assert state.roth == 500

    def test_roth_is_last_and_untaxed(self):
        state = BucketState(traditional=0, roth=500, brokerage=0, brokerage_basis=0)
        assert state.withdraw(300, tax_rate=0.3, capital_gains_rate=0.15) == 0
        assert state.roth == pytest.approx(200)

    def test_shortfall_reported(self):
        state = BucketState(traditional=100, roth=50, brokerage=0, brokerage_basis=0)
        unmet = state.withdraw(200, tax_rate=0.0, capital_gains_rate=0.15)
        assert unmet == pytest.approx(50)
        assert state.total == 0

    def test_full_tax_traditional_funds_nothing(self):
        state = BucketState(traditional=1000, roth=0, brokerage=0, brokerage_basis=0)
        assert state.withdraw(100, tax_rate=1.0, capital_gains_rate=0.15) == 100
        assert state.traditional == 1000


class TestValuation:
    def test_liquidation_value(self):
        state = BucketState(traditional=1000, roth=1000, brokerage=1000, brokerage_basis=400)
        value = state.liquidation_value(tax_rate=0.2, capital_gains_rate=0.15)
        assert value == pytest.approx(1000 + 800 + 1000 - 600 * 0.15)
        assert value <= state.total

    def test_sustainable_income(self):
        state = BucketState(traditional=1000, roth=1000, brokerage=1000, brokerage_basis=400)
        income = state.sustainable_income(0.04, tax_rate=0.2, capital_gains_rate=0.15)
        assert income == pytest.approx(0.04 * 2710)

    def test_contributions_add_basis(self):
        state = BucketState.from_amounts(BucketAmounts(brokerage=1000))
        state.accumulate(0.0, BucketAmounts(brokerage=100))
        assert state.brokerage == 1100
        assert state.brokerage_basis == 1100
        assert state.unrealized_gain_ratio == 0
