#!/usr/bin/env python3
"""
Safe Arithmetic Primitives

Division and percentage helpers shared by every calculation in the engine.
Empty or zero-activity periods must never leak NaN or Infinity into reports,
so every ratio in the package goes through these functions.
"""

import math


def safe_divide(numerator: float, denominator: float) -> float:
    """
    Divide two numbers, returning 0 when the denominator is unusable.

    Args:
        numerator: Dividend
        denominator: Divisor

    Returns:
        numerator / denominator, or 0.0 when the denominator is zero, NaN
        or infinite

    Examples:
        safe_divide(10, 4) -> 2.5
        safe_divide(10, 0) -> 0.0
        safe_divide(0, float("nan")) -> 0.0
    """
    if denominator == 0 or not math.isfinite(denominator):
        return 0.0
    return numerator / denominator


def percent_change(current: float, previous: float) -> float:
    """
    Period-over-period change in percent.

    A previous value of zero has no meaningful base: any positive current
    value is reported as +100%, anything else as 0%.

    Args:
        current: Value for the current period
        previous: Value for the preceding period

    Returns:
        Percentage change
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100
