"""Headline figures of a projection, nominal next to today's value."""

from __future__ import annotations

from typing import List

from backend.config import DEFAULT_LOCALE
from backend.core.formatting import format_currency
from backend.models import ProjectionResult
from backend.schemas.projection import StatCard


def _card(label: str, nominal: float, deflated: float, locale: str, highlight: bool = False) -> StatCard:
    return StatCard(
        label=label,
        nominal=nominal,
        deflated=deflated,
        nominalDisplay=format_currency(nominal, locale=locale),
        deflatedDisplay=format_currency(deflated, locale=locale),
        highlight=highlight,
    )


def summary_cards(result: ProjectionResult, locale: str = DEFAULT_LOCALE) -> List[StatCard]:
    return [
        _card("Final portfolio", result.finalPortfolio, result.finalPortfolioDeflated, locale, highlight=True),
        _card("Monthly income (4%)", result.safeWithdrawalMonthly, result.safeWithdrawalDeflated, locale),
        _card("Total contributed", result.totalContributions, result.totalContributionsDeflated, locale),
        _card("Interest gains", result.gains, result.gainsDeflated, locale),
        # the contribution is paid from today, so its first payment is already in today's money
        _card("Required monthly contribution", result.neededMonthly, result.neededMonthly, locale),
        _card("Required portfolio", result.neededPortfolio, result.neededPortfolioDeflated, locale),
    ]
