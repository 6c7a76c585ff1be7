"""
Fixed-point money helpers.

Amounts are carried as integer cents inside the analytics code and only
turned back into two-place ``Decimal`` values at output boundaries.
"""

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from fractions import Fraction
from typing import Union

from fintrack.exceptions import InvalidAmountError

Number = Union[int, float, Decimal, str]

CENT = Decimal("0.01")


def to_cents(value: Number) -> int:
    """Convert a currency amount to integer cents, rounding half up."""
    if isinstance(value, bool):
        raise InvalidAmountError(f"Boolean is not a monetary amount: {value!r}")
    if isinstance(value, int):
        return value * 100
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidAmountError(f"Non-finite amount: {value!r}")
        value = repr(value)
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidAmountError(f"Not a number: {value!r}") from None
    if not isinstance(value, Decimal):
        raise InvalidAmountError(f"Unsupported amount type {type(value).__name__}: {value!r}")
    if not value.is_finite():
        raise InvalidAmountError(f"Non-finite amount: {value!r}")
    return int(value.quantize(CENT, rounding=ROUND_HALF_UP) * 100)


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a two-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def round_half_up(value: Fraction) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + Fraction(1, 2))


def percent_of(part: int, whole: int) -> int:
    """Integer percentage of ``part`` in ``whole``; 0 when ``whole`` is 0."""
    if whole == 0:
        return 0
    return round_half_up(Fraction(part * 100, whole))


def divide_cents(total: int, count: int) -> int:
    """Average in cents, rounded half up."""
    if count == 0:
        return 0
    return round_half_up(Fraction(total, count))
