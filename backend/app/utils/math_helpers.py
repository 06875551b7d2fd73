"""Math helpers — rounding and clamping. No engine imports."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (Python's ``round`` is banker's).

    Used for gray percentages and grid-size suggestions: 2.5 → 3, 3.5 → 4.
    """
    return int(math.floor(value + 0.5))


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def percentage(part: int, total: int) -> float:
    """part / total × 100, 0.0 when total is zero."""
    if total == 0:
        return 0.0
    return part / total * 100.0
