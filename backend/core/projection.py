from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Mapping, Union

from backend.config import PROJECTION_CACHE_SIZE
from backend.core.accumulation import simulate_accumulation
from backend.core.decumulation import simulate_decumulation
from backend.core.rates import deflate, monthly_rate, yearly_factor
from backend.core.solver import solve_required_contribution
from backend.models import InputParameters, ProjectionResult

logger = logging.getLogger(__name__)


def project(params: Union[InputParameters, Mapping[str, Any]]) -> ProjectionResult:
    """
    Full projection for one set of inputs.

    Accepts an ``InputParameters`` or a plain mapping (validated first, so a
    bad mapping raises ``pydantic.ValidationError``). The result is a pure
    function of the inputs and is memoised on them; callers get their own
    copy and may mutate it freely.
    """
    if not isinstance(params, InputParameters):
        params = InputParameters.model_validate(params)
    return _project_cached(params).model_copy(deep=True)


@lru_cache(maxsize=PROJECTION_CACHE_SIZE)
def _project_cached(params: InputParameters) -> ProjectionResult:
    logger.debug("projecting %s", params.model_dump())

    saving = simulate_accumulation(
        years=params.years,
        annual_return_pct=params.annualReturnPct,
        monthly_contribution=params.monthlyContribution,
        inflation_pct=params.inflationPct,
        adjust_for_inflation=params.adjustContributionForInflation,
    )
    drawdown = simulate_decumulation(
        starting_portfolio=saving.final_portfolio,
        annual_return_pct=params.annualReturnPct,
        retirement_years=params.retirementYears,
        inflation_pct=params.inflationPct,
        accumulation_years=params.years,
    )
    target = solve_required_contribution(
        target_monthly_income_today=params.targetMonthlyIncomeToday,
        years=params.years,
        rate=monthly_rate(params.annualReturnPct),
        inflation_pct=params.inflationPct,
        adjust_for_inflation=params.adjustContributionForInflation,
    )

    warnings = list(target.warnings)
    if drawdown.depleted_in_year is not None:
        warnings.append(f"portfolio depleted in retirement year {drawdown.depleted_in_year}")

    # Everything below is priced at retirement start
    deflator = yearly_factor(params.inflationPct, params.years)
    gains = saving.final_portfolio - saving.total_contributions

    result = ProjectionResult(
        accumulationMonthly=saving.monthly,
        accumulationYearly=saving.yearly,
        retirementMonthly=drawdown.monthly,
        retirementYearly=drawdown.yearly,
        finalPortfolio=saving.final_portfolio,
        finalPortfolioDeflated=deflate(saving.final_portfolio, deflator),
        safeWithdrawalMonthly=drawdown.safe_withdrawal_monthly,
        safeWithdrawalDeflated=deflate(drawdown.safe_withdrawal_monthly, deflator),
        totalContributions=saving.total_contributions,
        totalContributionsDeflated=deflate(saving.total_contributions, deflator),
        gains=gains,
        gainsDeflated=deflate(gains, deflator),
        neededMonthly=target.needed_monthly,
        neededPortfolio=target.needed_portfolio,
        neededPortfolioDeflated=deflate(target.needed_portfolio, deflator),
        targetNominalMonthly=target.target_nominal_monthly,
        warnings=warnings,
    )
    logger.debug(
        "final portfolio %.2f, safe withdrawal %.2f/month, needed %.2f/month",
        result.finalPortfolio,
        result.safeWithdrawalMonthly,
        result.neededMonthly,
    )
    return result


__all__ = [
    "InputParameters",
    "ProjectionResult",
    "project",
]
