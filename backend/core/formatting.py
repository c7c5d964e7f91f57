"""Currency display helpers shared by the summary cards and API consumers."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from backend.config import CURRENCY_LOCALES, DEFAULT_LOCALE


class UnsupportedLocaleError(ValueError):
    def __init__(self, locale: str):
        super().__init__(f"unsupported locale {locale!r}; expected one of {sorted(CURRENCY_LOCALES)}")
        self.locale = locale


def _locale_settings(locale: str) -> Dict[str, str]:
    try:
        return CURRENCY_LOCALES[locale]
    except KeyError:
        raise UnsupportedLocaleError(locale) from None


def _round_for_display(value: float, places: int) -> Decimal:
    """Round ties away from zero on the exact binary value, like ``toFixed`` and ``Intl``."""
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _with_symbol(settings: Dict[str, str], body: str, negative: bool) -> str:
    sign = "-" if negative else ""
    return f"{sign}{settings['symbol']}{settings['separator']}{body}"


def format_currency(value: float, compact: bool = False, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format ``value`` as whole currency units in ``locale``.

    With ``compact=True`` magnitudes of a million or more become ``1.5M`` and
    of a thousand or more become ``250K``; the abbreviated forms always use a
    plain space after the symbol and ``.`` as the decimal point.
    """
    settings = _locale_settings(locale)

    if not math.isfinite(value):
        return _with_symbol(settings, str(abs(value)), value < 0)

    if compact:
        if abs(value) >= 1e6:
            return f"{settings['symbol']} {_round_for_display(value / 1e6, 1)}M"
        if abs(value) >= 1e3:
            return f"{settings['symbol']} {_round_for_display(value / 1e3, 0)}K"

    rounded = int(_round_for_display(value, 0))
    body = f"{abs(rounded):,}".replace(",", settings["group"])
    return _with_symbol(settings, body, rounded < 0)
