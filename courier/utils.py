# courier-dispatch/courier/utils.py
"""
Utility functions for the Courier Dispatch service.

Provides rounding and formatting helpers shared by the engines and the
result writer. Rounding is half-up (away from zero for halves) rather than
Python's default banker's rounding, so ``146.5`` prints as ``147``.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float, Decimal]


def round_half_up(value: Number, places: int = 0) -> float:
    """
    Round a number to a fixed number of decimal places, halves away from zero.

    The value goes through its shortest ``str`` form first so that floats
    like ``1.005`` round the way they read rather than the way they are
    stored in binary.

    Args:
        value: Number to round
        places: Decimal places to keep (0 rounds to a whole number)

    Returns:
        The rounded value as a float

    Example:
        >>> round_half_up(146.5)
        147.0
        >>> round_half_up(2.675, 2)
        2.68
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_amount(value: Number) -> str:
    """
    Format a money amount as a whole number for output lines.

    Example:
        >>> format_amount(1327.5)
        '1328'
    """
    return str(int(round_half_up(value)))


def format_hours(value: float, places: int = 2) -> str:
    """
    Format an estimated delivery time in its shortest form.

    Trailing zeros are dropped but at least one decimal is kept,
    e.g. ``3.98``, ``1.4``, ``2.0``.
    """
    return repr(round_half_up(value, places))


def format_time_duration(hours: float) -> str:
    """
    Format a duration in hours as a human-readable string.

    Args:
        hours: Duration in hours

    Returns:
        Formatted string like "1h 23m" or "45m"
    """
    minutes = hours * 60
    if minutes < 60:
        return f"{minutes:.0f}m"
    whole_hours = int(minutes // 60)
    mins = int(minutes % 60)
    return f"{whole_hours}h {mins}m"
