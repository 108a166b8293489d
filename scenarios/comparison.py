"""
Side-by-side comparison of saved scenarios.

Every scenario is re-simulated from its stored inputs; results are never cached
on the record, so a comparison always reflects the current engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.schema import SimulationResult
from engine.rates import resolve_nominal_return
from engine.runner import simulate

from .model import Scenario


@dataclass(frozen=True)
class ScenarioOutcome:
    scenario: Scenario
    result: SimulationResult


def run_scenarios(
    scenarios: Sequence[Scenario],
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> List[ScenarioOutcome]:
    return [ScenarioOutcome(scenario=s, result=simulate(s.inputs, config)) for s in scenarios]


def compare_scenarios(
    scenarios: Sequence[Scenario],
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> pd.DataFrame:
    """
    One row per scenario with the headline figures and winner flags.

    Winners are picked among valid scenarios only: most after-tax real wealth
    and most real spendable income at retirement. Ties all win.
    """
    outcomes = run_scenarios(scenarios, config)
    rows: List[Dict] = []
    for o in outcomes:
        inp, res = o.scenario.inputs, o.result
        rows.append({
            "id": o.scenario.id,
            "name": o.scenario.name,
            "created_at": o.scenario.created_at,
            "is_valid": res.is_valid,
            "retirement_age": inp.retirement_age,
            "return_pct": resolve_nominal_return(inp.strategy, inp.custom_return_rate) * 100.0,
            "after_tax_real": res.projected_after_tax_real,
            "income_real": res.projected_income_real,
            "target_income_real": res.target_income_real,
            "income_gap": res.income_gap,
            "is_on_track": res.is_on_track,
            "solvency_age": res.solvency_age,
        })

    df = pd.DataFrame(rows)
    if df.empty:
        return df

    valid = df["is_valid"].to_numpy(dtype=bool)
    for col, flag in [("after_tax_real", "wealth_winner"), ("income_real", "income_winner")]:
        values = df[col].to_numpy(dtype=float)
        if valid.any():
            best = values[valid].max()
            df[flag] = valid & np.isclose(values, best)
        else:
            df[flag] = False
    return df
