"""Exact rational arithmetic for the planned button press step."""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction

ExactTime = Fraction
StepValue = Fraction | Decimal | int | float | str

_MAX_DECIMAL_PLACES = 32


def exact_time(value: StepValue) -> ExactTime:
    """Convert a number to an exact rational.

    Floats are read through their shortest repr, so ``0.8`` becomes ``4/5``
    rather than the nearest binary fraction.
    """
    if isinstance(value, bool):
        raise TypeError("A boolean is not a step value.")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Step values must be finite, got {value!r}.")
        return Fraction(repr(value))
    return Fraction(value)


def format_exact_time(value: StepValue) -> str:
    exact = exact_time(value)
    if exact.denominator == 1:
        return str(exact.numerator)
    sign = "-" if exact < 0 else ""
    magnitude = abs(exact)
    for places in range(1, _MAX_DECIMAL_PLACES + 1):
        scaled = magnitude * 10**places
        if scaled.denominator == 1:
            digits = str(scaled.numerator).rjust(places + 1, "0")
            return f"{sign}{digits[:-places]}.{digits[-places:]}"
    return str(exact)
