"""Annual-to-monthly rate conversion, deflators and currency rounding."""

from __future__ import annotations

import math
from typing import Union

from backend.config import MONTHS_PER_YEAR

Number = Union[int, float]


def _power(base: float, exponent: float) -> float:
    """``base ** exponent`` that saturates to inf instead of raising OverflowError."""
    try:
        return base**exponent
    except OverflowError:
        return math.inf


def monthly_rate(annual_pct: float) -> float:
    """Monthly rate that compounds to ``annual_pct`` percent over a year."""
    if annual_pct < -100:
        raise ValueError(f"annual rate {annual_pct}% is below -100%")
    return _power(1 + annual_pct / 100, 1 / MONTHS_PER_YEAR) - 1


def yearly_factor(annual_pct: float, years: float) -> float:
    return _power(1 + annual_pct / 100, years)


def monthly_deflator(monthly_inflation: float, absolute_month: int) -> float:
    return _power(1 + monthly_inflation, absolute_month)


def deflate(value: float, deflator: float) -> float:
    """Express ``value`` in today's money. A deflator that underflowed to 0 gives inf/nan."""
    if deflator == 0:
        if value == 0 or math.isnan(value):
            return math.nan
        return math.copysign(math.inf, value)
    return value / deflator


def round_currency(value: float) -> Number:
    """Round half-up to a whole currency unit; non-finite values pass through."""
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))
