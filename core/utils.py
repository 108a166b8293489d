from __future__ import annotations

import math
from typing import Iterable, Mapping

import numpy as np


def require_fields(data: Mapping, fields: Iterable[str]) -> None:
    missing = [f for f in fields if f not in data]
    if missing:
        raise ValueError(f"Missing required fields: {missing}")


def round_currency(x, decimals: int = 0):
    """Round half away from zero (vectorized). Whole currency units by default."""
    m = 10 ** decimals
    arr = np.asarray(x, dtype=float)
    out = np.sign(arr) * (np.floor(np.abs(arr) * m + 0.5) / m)
    if out.ndim == 0:
        return float(out)
    return out


def finite_or_zero(x: float) -> float:
    """Collapse NaN/inf to 0.0 so no summary figure leaves the engine non-finite."""
    x = float(x)
    return x if math.isfinite(x) else 0.0


def percent_to_fraction(pct: float) -> float:
    return float(pct or 0.0) / 100.0
