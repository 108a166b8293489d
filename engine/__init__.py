"""
Projection engine: monthly three-bucket simulation plus the rate helpers and solvers it uses.
"""

from .runner import simulate
from .rates import adjust_future_to_real, grow_real_to_nominal, resolve_nominal_return
from .solvers import future_value, required_contribution, required_return

__all__ = [
    "simulate",
    "adjust_future_to_real",
    "grow_real_to_nominal",
    "resolve_nominal_return",
    "future_value",
    "required_contribution",
    "required_return",
]
