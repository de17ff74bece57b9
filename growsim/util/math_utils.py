"""Numeric helpers shared by the formula modules."""

from __future__ import annotations


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))
