"""Saving phase: monthly compounding with end-of-month contributions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from backend.config import MONTHS_PER_YEAR
from backend.core.rates import deflate, monthly_deflator, monthly_rate, round_currency, yearly_factor
from backend.models import AccumulationPoint


@dataclass
class AccumulationRun:
    final_portfolio: float
    total_contributions: float
    monthly: List[AccumulationPoint] = field(default_factory=list)
    yearly: List[AccumulationPoint] = field(default_factory=list)


def contribution_for_year(
    monthly_contribution: float,
    inflation_pct: float,
    year: int,
    adjust_for_inflation: bool,
) -> float:
    """Monthly contribution paid during ``year`` (1-based)."""
    if not adjust_for_inflation:
        return monthly_contribution
    return monthly_contribution * yearly_factor(inflation_pct, year - 1)


def grow_month(balance: float, rate: float, cashflow: float) -> Tuple[float, float]:
    """Accrue one month of return, then apply ``cashflow``. Returns (new balance, return)."""
    month_return = balance * rate
    return balance + month_return + cashflow, month_return


def _point(
    year: int,
    month: int,
    period_contribution: float,
    period_return: float,
    portfolio: float,
    contributions: float,
    deflator: float,
) -> AccumulationPoint:
    portfolio_rounded = round_currency(portfolio)
    contributions_rounded = round_currency(contributions)
    return AccumulationPoint(
        year=year,
        month=month,
        periodContribution=round_currency(period_contribution),
        periodReturn=round_currency(period_return),
        cumulativeContributions=contributions_rounded,
        cumulativeContributionsDeflated=round_currency(deflate(contributions, deflator)),
        portfolioValue=portfolio_rounded,
        portfolioValueDeflated=round_currency(deflate(portfolio, deflator)),
        # difference of the rounded figures keeps value == contributions + gains exact
        gains=portfolio_rounded - contributions_rounded,
    )


def simulate_accumulation(
    years: int,
    annual_return_pct: float,
    monthly_contribution: float,
    inflation_pct: float,
    adjust_for_inflation: bool,
) -> AccumulationRun:
    """
    Run the saving phase month by month.

    Each month the portfolio first earns the monthly rate, then receives that
    year's contribution. Besides the monthly points, one point per year is
    built from the exact end-of-year state with the yearly deflator
    ``(1 + inflation) ** year``; its period fields hold the year's totals.
    """
    rate = monthly_rate(annual_return_pct)
    monthly_inflation = monthly_rate(inflation_pct)

    run = AccumulationRun(final_portfolio=0.0, total_contributions=0.0)
    portfolio = 0.0
    total_contributions = 0.0

    for year in range(1, years + 1):
        contribution = contribution_for_year(
            monthly_contribution, inflation_pct, year, adjust_for_inflation
        )
        year_return = 0.0
        year_contribution = 0.0

        for month in range(1, MONTHS_PER_YEAR + 1):
            portfolio, month_return = grow_month(portfolio, rate, contribution)
            total_contributions += contribution
            year_return += month_return
            year_contribution += contribution

            absolute_month = (year - 1) * MONTHS_PER_YEAR + month
            run.monthly.append(
                _point(
                    year,
                    month,
                    contribution,
                    month_return,
                    portfolio,
                    total_contributions,
                    monthly_deflator(monthly_inflation, absolute_month),
                )
            )

        run.yearly.append(
            _point(
                year,
                MONTHS_PER_YEAR,
                year_contribution,
                year_return,
                portfolio,
                total_contributions,
                yearly_factor(inflation_pct, year),
            )
        )

    run.final_portfolio = portfolio
    run.total_contributions = total_contributions
    return run


def final_portfolio(
    years: int,
    rate: float,
    monthly_contribution: float,
    inflation_pct: float,
    adjust_for_inflation: bool,
) -> float:
    """Nominal balance after ``years`` of saving, without building any points.

    ``rate`` is already the monthly rate; the solver calls this many times.
    """
    portfolio = 0.0
    for year in range(1, years + 1):
        contribution = contribution_for_year(
            monthly_contribution, inflation_pct, year, adjust_for_inflation
        )
        for _ in range(MONTHS_PER_YEAR):
            portfolio, _return = grow_month(portfolio, rate, contribution)
    return portfolio
