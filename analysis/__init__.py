"""
Analysis on top of the engine: goal sandbox, reality check, series frames.
"""

from .benchmarks import HISTORICAL_BENCHMARKS, HistoricalBenchmark, benchmarks_table, get_benchmark
from .goals import GoalAnalysis, analyze_goal
from .reality import RealityCheckReport, comparison_window, reality_check
from .series import SERIES_COLUMNS, projections_to_frame, retirement_row

__all__ = [
    "HISTORICAL_BENCHMARKS",
    "HistoricalBenchmark",
    "benchmarks_table",
    "get_benchmark",
    "GoalAnalysis",
    "analyze_goal",
    "RealityCheckReport",
    "comparison_window",
    "reality_check",
    "SERIES_COLUMNS",
    "projections_to_frame",
    "retirement_row",
]
