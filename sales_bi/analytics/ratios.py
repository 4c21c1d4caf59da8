"""
Ratio Helpers

Division helpers for aggregates whose denominator may legitimately be zero.
Instead of raising or leaking IEEE inf/NaN, they return a NonFinite marker
that compares equal to itself and can be rendered as "not applicable".
"""

import math
from enum import Enum
from typing import Union


class NonFinite(str, Enum):
    """Marker for a ratio that cannot be computed"""
    INFINITE = "infinite"  # x / 0 with x > 0
    NEGATIVE_INFINITE = "negative_infinite"  # x / 0 with x < 0
    UNDEFINED = "undefined"  # 0 / 0


Ratio = Union[float, NonFinite]


def is_finite(value: Ratio) -> bool:
    """True when value is a usable number rather than a marker"""
    return not isinstance(value, NonFinite)


def safe_divide(numerator: float, denominator: float) -> Ratio:
    """
    Divide, returning a NonFinite marker when the denominator is zero.

    Args:
        numerator: Dividend
        denominator: Divisor

    Returns:
        The quotient as float, or the matching NonFinite marker
    """
    if denominator == 0:
        if numerator > 0:
            return NonFinite.INFINITE
        if numerator < 0:
            return NonFinite.NEGATIVE_INFINITE
        return NonFinite.UNDEFINED

    result = numerator / denominator
    if math.isnan(result):
        return NonFinite.UNDEFINED
    return result


def percentage(part: Ratio, whole: Ratio) -> Ratio:
    """Express part as a percentage of whole; markers propagate"""
    if not is_finite(part):
        return part
    if not is_finite(whole):
        return NonFinite.UNDEFINED

    ratio = safe_divide(part, whole)
    if not is_finite(ratio):
        return ratio
    return ratio * 100


def percent_change(current: float, previous: float) -> Ratio:
    """Growth of current over previous in percent"""
    return percentage(current - previous, previous)
