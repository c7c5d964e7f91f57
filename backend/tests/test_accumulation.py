from __future__ import annotations

from math import isclose

import pytest

from backend.core.accumulation import contribution_for_year, final_portfolio, simulate_accumulation
from backend.core.rates import monthly_deflator, monthly_rate

SCENARIOS = [
    # years, annual return %, monthly contribution, inflation %, adjust
    (30, 10.0, 1000.0, 5.0, True),
    (30, 10.0, 1000.0, 5.0, False),
    (12, 7.5, 333.33, 3.2, True),
    (5, -20.0, 850.0, 12.0, False),
    (40, 3.0, 2500.0, -1.5, True),
    (3, -100.0, 500.0, 4.0, True),
]


@pytest.mark.parametrize("years, annual_return, contribution, inflation, adjust", SCENARIOS)
def test_portfolio_equals_contributions_plus_gains(years, annual_return, contribution, inflation, adjust):
    run = simulate_accumulation(years, annual_return, contribution, inflation, adjust)

    for point in run.monthly + run.yearly:
        assert point.portfolioValue == point.cumulativeContributions + point.gains


@pytest.mark.parametrize("years, annual_return, contribution, inflation, adjust", SCENARIOS)
def test_yearly_points_match_month_twelve(years, annual_return, contribution, inflation, adjust):
    run = simulate_accumulation(years, annual_return, contribution, inflation, adjust)

    assert len(run.monthly) == years * 12
    assert len(run.yearly) == years
    for yearly in run.yearly:
        december = run.monthly[yearly.year * 12 - 1]
        assert (december.year, december.month) == (yearly.year, 12)
        assert yearly.month == 12
        assert yearly.portfolioValue == december.portfolioValue
        assert yearly.cumulativeContributions == december.cumulativeContributions
        assert yearly.gains == december.gains


def test_points_are_ordered_without_gaps():
    run = simulate_accumulation(4, 6.0, 100.0, 2.0, True)

    elapsed = [(point.year - 1) * 12 + point.month for point in run.monthly]
    assert elapsed == list(range(1, 4 * 12 + 1))
    assert [point.year for point in run.yearly] == [1, 2, 3, 4]


def test_zero_return_without_adjustment_sums_contributions_exactly():
    """
    With zero return and flat contributions the portfolio is just the sum of the contributions.
    """
    run = simulate_accumulation(25, 0.0, 1000.0, 5.0, False)

    assert run.final_portfolio == 1000.0 * 12 * 25
    assert run.total_contributions == 1000.0 * 12 * 25
    assert run.yearly[-1].gains == 0
    assert all(point.periodReturn == 0 for point in run.monthly)


def test_zero_contribution_stays_at_zero():
    run = simulate_accumulation(10, 8.0, 0.0, 5.0, True)

    assert run.final_portfolio == 0.0
    for point in run.monthly + run.yearly:
        assert point.portfolioValue == 0
        assert point.cumulativeContributions == 0
        assert point.gains == 0


def test_return_accrues_before_the_contribution_lands():
    run = simulate_accumulation(1, 12.0, 1000.0, 0.0, False)
    rate = monthly_rate(12.0)

    first, second = run.monthly[0], run.monthly[1]
    assert first.periodReturn == 0
    assert first.portfolioValue == 1000
    assert second.periodReturn == round(1000 * rate)
    assert isclose(run.final_portfolio, 1000 * ((1 + rate) ** 12 - 1) / rate, rel_tol=1e-12)


def test_contributions_step_up_with_inflation_once_a_year():
    run = simulate_accumulation(3, 10.0, 1000.0, 5.0, True)

    assert [point.periodContribution for point in run.monthly[:12]] == [1000] * 12
    assert run.monthly[12].periodContribution == 1050
    assert run.monthly[24].periodContribution == 1103  # 1000 * 1.05 ** 2 = 1102.5
    assert run.yearly[0].periodContribution == 12000
    assert isclose(contribution_for_year(1000.0, 5.0, 3, True), 1102.5, rel_tol=1e-12)
    assert contribution_for_year(1000.0, 5.0, 3, False) == 1000.0


def test_yearly_period_return_is_the_sum_of_the_months():
    run = simulate_accumulation(2, 9.0, 700.0, 4.0, False)

    for yearly in run.yearly:
        months = run.monthly[(yearly.year - 1) * 12 : yearly.year * 12]
        assert abs(yearly.periodReturn - sum(point.periodReturn for point in months)) <= 6


def test_deflated_values_use_yearly_deflator_at_year_end():
    run = simulate_accumulation(10, 10.0, 1000.0, 5.0, True)

    last = run.yearly[-1]
    assert last.portfolioValueDeflated == round(run.final_portfolio / 1.05**10)
    assert last.cumulativeContributionsDeflated == round(run.total_contributions / 1.05**10)


def test_final_portfolio_matches_the_full_simulation():
    for adjust in (True, False):
        run = simulate_accumulation(30, 10.0, 1234.5, 5.0, adjust)
        assert final_portfolio(30, monthly_rate(10.0), 1234.5, 5.0, adjust) == run.final_portfolio


def test_total_loss_rate_keeps_only_the_latest_contribution():
    run = simulate_accumulation(2, -100.0, 500.0, 0.0, False)

    assert run.final_portfolio == 500.0
    assert run.total_contributions == 500.0 * 24
    assert run.yearly[-1].gains == 500 - 500 * 24


def test_deflation_grows_with_elapsed_months_under_positive_inflation():
    run = simulate_accumulation(5, 8.0, 1000.0, 4.0, True)
    monthly_inflation = monthly_rate(4.0)

    deflators = [monthly_deflator(monthly_inflation, month) for month in range(1, len(run.monthly) + 1)]
    assert all(later > earlier for earlier, later in zip(deflators, deflators[1:]))

    for point in run.monthly + run.yearly:
        assert point.portfolioValueDeflated <= point.portfolioValue
        assert point.cumulativeContributionsDeflated <= point.cumulativeContributions
    # the same nominal amount is worth less in today's money the later it is reached
    contributions_ratio = [
        point.cumulativeContributionsDeflated / point.cumulativeContributions for point in run.yearly
    ]
    assert contributions_ratio == sorted(contributions_ratio, reverse=True)
