"""
Calculator Input Checks
=======================

Domain checks shared by the calculators. Every failure raises InvalidInput
immediately; calculators never recover from bad input.
"""

import math

from shared.exceptions import InvalidInput


def require_finite(field: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(field, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidInput(field, value, "must be finite")
    return float(value)


def require_non_negative(field: str, value: float) -> float:
    value = require_finite(field, value)
    if value < 0:
        raise InvalidInput(field, value, "must not be negative")
    return value


def require_positive(field: str, value: float) -> float:
    value = require_finite(field, value)
    if value <= 0:
        raise InvalidInput(field, value, "must be greater than zero")
    return value


def round_money(amount: float) -> float:
    """Round to halalas (2 decimals)."""
    return round(amount, 2)
