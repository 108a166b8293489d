"""
Input preparation: building snapshots from plain mappings, validation.
"""

from .loader import (
    canonicalize_keys,
    default_planner_input,
    load_planner_input,
    parse_strategy,
    planner_input_to_dict,
)
from .validators import ValidationResult, validate_inputs

__all__ = [
    "canonicalize_keys",
    "default_planner_input",
    "load_planner_input",
    "parse_strategy",
    "planner_input_to_dict",
    "ValidationResult",
    "validate_inputs",
]
