"""Percentage helpers shared by the analytics engine."""
from __future__ import annotations


def percent(part: int, whole: int) -> int:
    """Return ``part / whole`` as a whole percentage, rounding halves up.

    Works on integers only so ``percent(1, 8)`` is 13 rather than the 12 that
    float ``round`` would give. A zero (or negative) *whole* yields 0.
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)
