"""
Standalone calculators that sit beside the retirement engine: tax, mortgage, FIRE, education savings.
"""

from .education import EducationProjection, project_education
from .fire import FireProjection, project_fire
from .mortgage import (
    NO_BREAK_EVEN,
    MortgageResult,
    RefinanceAnalysis,
    RefinanceOption,
    amortize,
    analyze_refinance,
    level_payment,
)
from .tax import TaxResult, estimate_federal_tax

__all__ = [
    "EducationProjection",
    "project_education",
    "FireProjection",
    "project_fire",
    "NO_BREAK_EVEN",
    "MortgageResult",
    "RefinanceAnalysis",
    "RefinanceOption",
    "amortize",
    "analyze_refinance",
    "level_payment",
    "TaxResult",
    "estimate_federal_tax",
]
