"""Required monthly contribution for a target retirement income."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from backend.config import (
    MONTHS_PER_YEAR,
    SAFE_WITHDRAWAL_RATE,
    SOLVER_ITERATIONS,
    SOLVER_LOWER_BOUND,
    SOLVER_MAX_WIDENINGS,
    SOLVER_UPPER_DIVISOR,
)
from backend.core.accumulation import final_portfolio
from backend.core.rates import yearly_factor

logger = logging.getLogger(__name__)


@dataclass
class ContributionTarget:
    target_nominal_monthly: float
    needed_portfolio: float
    needed_monthly: float
    warnings: List[str] = field(default_factory=list)


def needed_portfolio_for_income(nominal_monthly_income: float) -> float:
    """Invert the 4% rule: portfolio whose safe withdrawal pays this income."""
    return nominal_monthly_income * MONTHS_PER_YEAR / SAFE_WITHDRAWAL_RATE


def find_monthly_contribution(
    target: float,
    years: int,
    rate: float,
    inflation_pct: float,
    adjust_for_inflation: bool,
    warnings: Optional[List[str]] = None,
) -> float:
    """
    Binary-search the starting monthly contribution that grows to ``target``.

    The bracket starts at ``[1, target / 10]`` and the search always runs
    ``SOLVER_ITERATIONS`` halvings; the last midpoint is returned. When the
    upper bound cannot reach the target it is doubled until it can, and when
    the lower bound already overshoots it drops to 0. Widening is
    reported through ``warnings``.
    """
    if target <= 0:
        return 0.0

    def simulate(contribution: float) -> float:
        return final_portfolio(years, rate, contribution, inflation_pct, adjust_for_inflation)

    lo = SOLVER_LOWER_BOUND
    hi = target / SOLVER_UPPER_DIVISOR

    if simulate(lo) >= target:
        lo = 0.0
    if hi < lo:
        hi = lo

    widenings = 0
    while simulate(hi) < target and widenings < SOLVER_MAX_WIDENINGS:
        hi = max(hi * 2, SOLVER_LOWER_BOUND)
        widenings += 1
    if widenings:
        message = (
            f"required contribution exceeds target/{SOLVER_UPPER_DIVISOR:g}; "
            f"search bracket widened to {hi:.2f}"
        )
        logger.warning(message)
        if warnings is not None:
            warnings.append(message)

    mid = 0.0
    for _ in range(SOLVER_ITERATIONS):
        mid = (lo + hi) / 2
        if simulate(mid) < target:
            lo = mid
        else:
            hi = mid
    return mid


def solve_required_contribution(
    target_monthly_income_today: float,
    years: int,
    rate: float,
    inflation_pct: float,
    adjust_for_inflation: bool,
) -> ContributionTarget:
    """Inflate the income target to retirement, size the portfolio and solve for the contribution."""
    target_nominal_monthly = target_monthly_income_today * yearly_factor(inflation_pct, years)
    needed = needed_portfolio_for_income(target_nominal_monthly)

    result = ContributionTarget(
        target_nominal_monthly=target_nominal_monthly,
        needed_portfolio=needed,
        needed_monthly=0.0,
    )
    result.needed_monthly = find_monthly_contribution(
        needed,
        years,
        rate,
        inflation_pct,
        adjust_for_inflation,
        warnings=result.warnings,
    )
    return result
