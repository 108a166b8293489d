"""
Saved scenarios: the record callers persist and the comparison built on it.
"""

from .model import Scenario, scenarios_from_json, scenarios_to_json
from .comparison import ScenarioOutcome, compare_scenarios, run_scenarios

__all__ = [
    "Scenario",
    "scenarios_from_json",
    "scenarios_to_json",
    "ScenarioOutcome",
    "compare_scenarios",
    "run_scenarios",
]
