"""Withdrawal phase under the 4% rule, inflation-adjusted once a year."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from backend.config import MONTHS_PER_YEAR, SAFE_WITHDRAWAL_RATE
from backend.core.accumulation import grow_month
from backend.core.rates import deflate, monthly_deflator, monthly_rate, round_currency, yearly_factor
from backend.models import RetirementPoint


@dataclass
class DecumulationRun:
    safe_withdrawal_monthly: float
    final_balance: float
    depleted_in_year: Optional[int] = None
    monthly: List[RetirementPoint] = field(default_factory=list)
    yearly: List[RetirementPoint] = field(default_factory=list)


def safe_withdrawal_monthly(portfolio: float) -> float:
    return portfolio * SAFE_WITHDRAWAL_RATE / MONTHS_PER_YEAR


def _point(
    year: int,
    month: int,
    period_withdrawal: float,
    period_return: float,
    balance: float,
    deflator: float,
) -> RetirementPoint:
    return RetirementPoint(
        year=year,
        month=month,
        periodWithdrawal=round_currency(period_withdrawal),
        periodReturn=round_currency(period_return),
        balance=round_currency(balance),
        balanceDeflated=round_currency(deflate(balance, deflator)),
    )


def simulate_decumulation(
    starting_portfolio: float,
    annual_return_pct: float,
    retirement_years: int,
    inflation_pct: float,
    accumulation_years: int,
) -> DecumulationRun:
    """
    Draw down ``starting_portfolio`` for ``retirement_years``.

    The base withdrawal is 4% of the starting portfolio per year, paid
    monthly; in retirement year ``y`` it is scaled by ``(1 + inflation) ** y``.
    The balance is floored at zero and stays there once depleted. Deflators
    count from the start of the plan, so ``accumulation_years`` is needed.
    """
    rate = monthly_rate(annual_return_pct)
    monthly_inflation = monthly_rate(inflation_pct)
    base_withdrawal = safe_withdrawal_monthly(starting_portfolio)

    run = DecumulationRun(safe_withdrawal_monthly=base_withdrawal, final_balance=0.0)
    balance = starting_portfolio

    for year in range(1, retirement_years + 1):
        withdrawal = base_withdrawal * yearly_factor(inflation_pct, year)
        year_return = 0.0
        year_withdrawal = 0.0

        for month in range(1, MONTHS_PER_YEAR + 1):
            balance, month_return = grow_month(balance, rate, -withdrawal)
            if balance <= 0:
                balance = 0.0
                if run.depleted_in_year is None and starting_portfolio > 0:
                    run.depleted_in_year = year
            year_return += month_return
            year_withdrawal += withdrawal

            absolute_month = (accumulation_years + year - 1) * MONTHS_PER_YEAR + month
            run.monthly.append(
                _point(
                    year,
                    month,
                    withdrawal,
                    month_return,
                    balance,
                    monthly_deflator(monthly_inflation, absolute_month),
                )
            )

        run.yearly.append(
            _point(
                year,
                MONTHS_PER_YEAR,
                year_withdrawal,
                year_return,
                balance,
                yearly_factor(inflation_pct, accumulation_years + year),
            )
        )

    run.final_balance = balance
    return run
