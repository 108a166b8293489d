"""
FIRE (financial independence) calculator.

FIRE number = annual spending / withdrawal rate. Net worth grows yearly at the
given rate and receives the year's savings (income minus spending) at year end.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd

from core.utils import round_currency

MAX_AGE = 90


@dataclass(frozen=True)
class FireProjection:
    fire_number: float
    annual_savings: float
    savings_rate_pct: float
    fire_age: Optional[int]
    years_to_fire: Optional[int]
    schedule: pd.DataFrame  # age, net_worth, fire_number, is_fire


def project_fire(
    current_age: int,
    net_worth: float,
    annual_income: float,
    annual_spending: float,
    growth_rate_pct: float = 7.0,
    withdrawal_rate_pct: float = 4.0,
    *,
    max_age: int = MAX_AGE,
) -> FireProjection:
    if withdrawal_rate_pct <= 0:
        raise ValueError("withdrawal_rate_pct must be positive.")

    annual_savings = max(0.0, annual_income - annual_spending)
    savings_rate = annual_savings / annual_income * 100.0 if annual_income > 0 else 0.0
    fire_number = annual_spending / (withdrawal_rate_pct / 100.0)

    balance = float(net_worth)
    fire_age: Optional[int] = None
    rows = []
    for age in range(int(current_age), max_age + 1):
        is_fire = balance >= fire_number
        if is_fire and fire_age is None:
            fire_age = age
        rows.append({
            "age": age,
            "net_worth": round_currency(balance),
            "fire_number": round_currency(fire_number),
            "is_fire": is_fire,
        })
        balance = balance * (1 + growth_rate_pct / 100.0) + annual_savings

    return FireProjection(
        fire_number=fire_number,
        annual_savings=annual_savings,
        savings_rate_pct=savings_rate,
        fire_age=fire_age,
        years_to_fire=fire_age - int(current_age) if fire_age is not None else None,
        schedule=pd.DataFrame(rows, columns=["age", "net_worth", "fire_number", "is_fire"]),
    )
