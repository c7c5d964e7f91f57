from __future__ import annotations

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from backend.config import MAX_HORIZON_YEARS

# Rounded currency fields stay float so inf/nan from extreme inputs survive.
Money = Union[int, float]


class InputParameters(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    years: int = Field(ge=1, le=MAX_HORIZON_YEARS)
    annualReturnPct: float = Field(gt=-100)
    monthlyContribution: float = Field(ge=0)
    inflationPct: float = Field(gt=-100)
    retirementYears: int = Field(ge=1, le=MAX_HORIZON_YEARS)
    targetMonthlyIncomeToday: float = Field(ge=0)
    adjustContributionForInflation: bool


class AccumulationPoint(BaseModel):
    """One month (or one year) of the saving phase."""

    model_config = ConfigDict(extra="forbid")

    year: int
    month: int
    periodContribution: Money
    periodReturn: Money
    cumulativeContributions: Money
    cumulativeContributionsDeflated: Money
    portfolioValue: Money
    portfolioValueDeflated: Money
    gains: Money


class RetirementPoint(BaseModel):
    """One month (or one year) of the withdrawal phase."""

    model_config = ConfigDict(extra="forbid")

    year: int
    month: int
    periodWithdrawal: Money
    periodReturn: Money
    balance: Money
    balanceDeflated: Money


class ProjectionResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    accumulationMonthly: List[AccumulationPoint]
    accumulationYearly: List[AccumulationPoint]
    retirementMonthly: List[RetirementPoint]
    retirementYearly: List[RetirementPoint]

    finalPortfolio: float
    finalPortfolioDeflated: float
    safeWithdrawalMonthly: float
    safeWithdrawalDeflated: float
    totalContributions: float
    totalContributionsDeflated: float
    gains: float
    gainsDeflated: float

    neededMonthly: float
    neededPortfolio: float
    neededPortfolioDeflated: float
    targetNominalMonthly: float

    warnings: List[str] = []
