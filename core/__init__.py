"""
Core package: input/result records, configuration, and shared utilities.
No business logic lives here.
"""

from .schema import (
    BucketAmounts,
    InvestmentStrategy,
    PlannerInput,
    SimulationResult,
    TargetType,
    YearlyProjection,
)
from .config import DEFAULT_ENGINE_CONFIG, INVESTMENT_STRATEGIES, EngineConfig
from .utils import require_fields, round_currency, finite_or_zero

__all__ = [
    "BucketAmounts",
    "InvestmentStrategy",
    "PlannerInput",
    "SimulationResult",
    "TargetType",
    "YearlyProjection",
    "DEFAULT_ENGINE_CONFIG",
    "INVESTMENT_STRATEGIES",
    "EngineConfig",
    "require_fields",
    "round_currency",
    "finite_or_zero",
]
