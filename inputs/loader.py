"""
Build a PlannerInput from a plain mapping (form state, saved scenario JSON).

Accepts both snake_case field names and the camelCase keys the web form
stores, plus the form's per-account savings fields (401k / IRA / brokerage).
"""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Mapping

from core.config import DEFAULT_INPUTS
from core.schema import InvestmentStrategy, PlannerInput, TargetType
from core.utils import require_fields


_KEY_ALIASES: Dict[str, str] = {
    # ages
    "currentAge": "current_age",
    "retirementAge": "retirement_age",
    "lifeExpectancy": "life_expectancy",
    # balances
    "currentPortfolio": "current_portfolio",
    "currentRothBalance": "current_roth_balance",
    "currentBrokerageBalance": "current_brokerage_balance",
    # legacy aggregate contributions
    "monthlyContribution": "monthly_contribution",
    "monthlyRothContribution": "monthly_roth_contribution",
    # goal
    "targetType": "target_type",
    "targetValue": "target_value",
    # assumptions
    "customReturnRate": "custom_return_rate",
    "inflationRate": "inflation_rate",
    "safeWithdrawalRate": "safe_withdrawal_rate",
    "retirementTaxRate": "retirement_tax_rate",
    "estimatedSocialSecurity": "monthly_pension",
    "estimated_social_security": "monthly_pension",
}

# per-account savings fields -> bucket they fund
_SAVINGS_FIELDS: Dict[str, str] = {
    "savingsTrad401k": "traditional_contribution",
    "savingsRoth401k": "roth_contribution",
    "savingsRothIRA": "roth_contribution",
    "savingsBrokerage": "brokerage_contribution",
}

_REQUIRED = ("current_age", "retirement_age", "life_expectancy")
_FIELD_NAMES = {f.name for f in dataclasses.fields(PlannerInput)}
_INT_FIELDS = {"current_age", "retirement_age", "life_expectancy"}


def canonicalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy with alias keys renamed and per-account savings summed into buckets."""
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _SAVINGS_FIELDS:
            target = _SAVINGS_FIELDS[key]
            out[target] = float(out.get(target, 0.0)) + float(value or 0.0)
            continue
        out[_KEY_ALIASES.get(key, key)] = value
    return out


def parse_strategy(value: Any) -> InvestmentStrategy:
    """Accept an enum, its value ('Balanced') or its name ('BALANCED')."""
    if isinstance(value, InvestmentStrategy):
        return value
    text = str(value).strip()
    for s in InvestmentStrategy:
        if text == s.value or text.upper() == s.name:
            return s
    raise ValueError(
        f"Unknown strategy {value!r}. Available: {[s.value for s in InvestmentStrategy]}"
    )


def load_planner_input(data: Mapping[str, Any]) -> PlannerInput:
    """
    Build an input snapshot; unknown keys (currency, UI settings) are ignored.
    """
    fields = canonicalize_keys(data)
    require_fields(fields, _REQUIRED)

    kwargs: Dict[str, Any] = {}
    for name, value in fields.items():
        if name not in _FIELD_NAMES or value is None:
            continue
        if name == "strategy":
            kwargs[name] = parse_strategy(value)
        elif name == "target_type":
            kwargs[name] = TargetType(str(value).lower())
        elif name in _INT_FIELDS:
            kwargs[name] = int(value)
        else:
            kwargs[name] = float(value)
    return PlannerInput(**kwargs)


def default_planner_input(**overrides: Any) -> PlannerInput:
    """Planner form starting values, with keyword overrides (snake_case or camelCase)."""
    return load_planner_input({**DEFAULT_INPUTS, **overrides})


def planner_input_to_dict(inputs: PlannerInput) -> Dict[str, Any]:
    """Plain JSON-friendly dict (enum members as their values)."""
    out = dataclasses.asdict(inputs)
    out["strategy"] = InvestmentStrategy(inputs.strategy).value
    out["target_type"] = TargetType(inputs.target_type).value
    return out
