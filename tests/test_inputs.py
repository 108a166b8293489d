from dataclasses import replace

import pytest

from core.schema import InvestmentStrategy, TargetType
from inputs import (
    canonicalize_keys,
    default_planner_input,
    load_planner_input,
    parse_strategy,
    planner_input_to_dict,
    validate_inputs,
)


FORM_STATE = {
    "currentAge": 35,
    "retirementAge": 65,
    "lifeExpectancy": 90,
    "currentPortfolio": 50000,
    "currentRothBalance": 10000,
    "savingsTrad401k": 800,
    "savingsRoth401k": 200,
    "savingsRothIRA": 300,
    "savingsBrokerage": 0,
    "targetType": "income",
    "targetValue": 40000,
    "strategy": "Aggressive",
    "inflationRate": 3,
    "safeWithdrawalRate": 4,
    "retirementTaxRate": 15,
    "estimatedSocialSecurity": 2000,
    "currency": "USD",
}


class TestLoader:
    def test_form_state(self):
        inputs = load_planner_input(FORM_STATE)
        assert inputs.current_age == 35
        assert inputs.traditional_contribution == 800
        assert inputs.roth_contribution == 500
        assert inputs.brokerage_contribution == 0
        assert inputs.current_roth_balance == 10000
        assert inputs.monthly_pension == 2000
        assert inputs.strategy is InvestmentStrategy.AGGRESSIVE
        assert inputs.target_type is TargetType.INCOME

    def test_savings_fields_summed_per_bucket(self):
        out = canonicalize_keys({"savingsRoth401k": 100, "savingsRothIRA": None})
        assert out == {"roth_contribution": 100.0}

    def test_missing_age_rejected(self):
        data = {k: v for k, v in FORM_STATE.items() if k != "currentAge"}
        with pytest.raises(ValueError, match="Missing required fields"):
            load_planner_input(data)

    def test_round_trip_through_dict(self):
        inputs = load_planner_input(FORM_STATE)
        assert load_planner_input(planner_input_to_dict(inputs)) == inputs

    @pytest.mark.parametrize("raw", ["Custom", "CUSTOM", InvestmentStrategy.CUSTOM])
    def test_parse_strategy(self, raw):
        assert parse_strategy(raw) is InvestmentStrategy.CUSTOM

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            parse_strategy("YOLO")

    def test_form_defaults(self):
        inputs = default_planner_input(retirementAge=67)
        assert inputs.retirement_age == 67
        assert inputs.traditional_contribution == 1000
        assert inputs.target_value == 60000
        assert inputs.strategy is InvestmentStrategy.BALANCED


class TestValidators:
    def test_clean_inputs_pass(self, base_inputs):
        result = validate_inputs(base_inputs)
        assert result.is_valid
        assert result.warnings == []
        assert result.summary() == "Inputs look fine."

    def test_age_ordering(self, base_inputs):
        result = validate_inputs(replace(base_inputs, retirement_age=35))
        assert not result.is_valid
        assert any("Retirement age" in e for e in result.errors)

    def test_portions_exceed_portfolio(self, base_inputs):
        result = validate_inputs(
            replace(base_inputs, current_roth_balance=40000, current_brokerage_balance=20000)
        )
        assert not result.is_valid
        lines = result.summary().splitlines()
        assert [line for line in lines if line.startswith("error:")] == [
            "error: Roth and brokerage balances together exceed the current portfolio total."
        ]

    def test_negative_contribution(self, base_inputs):
        result = validate_inputs(replace(base_inputs, roth_contribution=-5))
        assert "roth_contribution cannot be negative." in result.errors

    def test_tax_rate_bounds(self, base_inputs):
        assert not validate_inputs(replace(base_inputs, retirement_tax_rate=120)).is_valid
        high = validate_inputs(replace(base_inputs, retirement_tax_rate=60))
        assert high.is_valid and high.warnings

    def test_decimal_looking_rate_warns(self, base_inputs):
        result = validate_inputs(replace(base_inputs, inflation_rate=0.03))
        assert result.is_valid
        assert any("inflation_rate" in w for w in result.warnings)

    def test_custom_rate_checked_only_for_custom(self, base_inputs):
        assert validate_inputs(replace(base_inputs, custom_return_rate=0.07)).warnings == []
        custom = replace(base_inputs, strategy=InvestmentStrategy.CUSTOM, custom_return_rate=25)
        assert any("far above" in w for w in validate_inputs(custom).warnings)
