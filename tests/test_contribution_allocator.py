import itertools

import pytest

from engine.contribution_allocator import (
    CappedStep,
    MatchStep,
    allocate_contributions,
    capture_employer_match,
    fill_additional_401k,
    fill_ira,
    reconcile_rounding,
    round_contribution_percent_up,
)
from models import ContributionLimits, IncomeProfile

INCOME = IncomeProfile(salary=80_000.0, bonus=0.0, employer_match_pct=0.03)
LIMITS = ContributionLimits(contribution_limit_401k=24_500.0, ira_limit=7_500.0)


# --- round_contribution_percent_up

def test_whole_percent_is_kept():
    assert round_contribution_percent_up(2_400.0, 80_000.0, 24_500.0) == 2_400.0


def test_fractional_percent_rounds_up():
    assert round_contribution_percent_up(1_500.0, 80_000.0, 24_500.0) == 1_600.0


def test_rounding_is_capped_at_limit():
    assert round_contribution_percent_up(24_100.0, 80_000.0, 24_500.0) == 24_500.0


def test_no_gross_pay_leaves_amount_alone():
    assert round_contribution_percent_up(1_234.0, 0.0, 24_500.0) == 1_234.0


@pytest.mark.parametrize("amount,gross", list(itertools.product(
    [0.0, 1.0, 799.99, 2_400.0, 10_100.0, 24_499.0, 24_500.0],
    [1_000.0, 80_000.0, 123_456.78],
)))
def test_rounding_post_condition(amount, gross):
    amount = min(amount, 24_500.0)
    result = round_contribution_percent_up(amount, gross, 24_500.0)
    assert amount <= result <= 24_500.0


# --- individual steps

def test_capture_match_uses_half_the_need():
    step = capture_employer_match(3_000.0, INCOME, LIMITS)
    # 1,500 is 1.875% of pay, rounded up to 2%
    assert step.employee == 1_600.0
    assert step.employer_match == 1_600.0
    assert step.remaining_need == 0.0


def test_capture_match_stops_at_match_cap():
    step = capture_employer_match(20_000.0, INCOME, LIMITS)
    assert step.employee == 2_400.0
    assert step.employer_match == 2_400.0
    assert step.remaining_need == pytest.approx(15_200.0)


def test_capture_match_skipped_without_match():
    no_match = IncomeProfile(salary=80_000.0, employer_match_pct=0.0)
    expected = MatchStep(employee=0.0, employer_match=0.0, remaining_need=10_000.0)
    assert capture_employer_match(10_000.0, no_match, LIMITS) == expected


def test_fill_ira_and_additional_401k():
    assert fill_ira(5_000.0, LIMITS) == CappedStep(amount=5_000.0, remaining_need=0.0)
    assert fill_ira(9_000.0, LIMITS) == CappedStep(amount=7_500.0, remaining_need=1_500.0)
    assert fill_additional_401k(30_000.0, 2_400.0, LIMITS) == CappedStep(amount=22_100.0, remaining_need=7_900.0)


def test_reconcile_takes_rounding_out_of_ira():
    step = reconcile_rounding(10_100.0, 7_500.0, 2_400.0, INCOME, LIMITS)
    assert step.employee == 10_400.0
    assert step.ira == 7_200.0
    assert step.employer_match == 2_400.0
    assert step.rounding_credit == 0.0


# --- full waterfall

def test_waterfall_within_limits():
    result = allocate_contributions(20_000.0, INCOME, LIMITS)
    assert result.employee_contribution == 10_400.0
    assert result.employee_contribution_pct == pytest.approx(13.0)
    assert result.employer_match == 2_400.0
    assert result.ira_contribution == pytest.approx(7_200.0)
    assert result.non_retirement == 0.0
    assert result.overflow == 0.0
    assert result.total == pytest.approx(20_000.0)


def test_overflow_goes_to_non_retirement():
    result = allocate_contributions(100_000.0, INCOME, LIMITS, non_retirement_need=1_000.0)
    assert result.employee_contribution == 24_500.0
    assert result.employer_match == 2_400.0
    assert result.ira_contribution == 7_500.0
    assert result.overflow == pytest.approx(65_600.0)
    assert result.non_retirement == pytest.approx(66_600.0)
    assert result.total == pytest.approx(101_000.0)


def test_total_matches_need_plus_bridge():
    result = allocate_contributions(20_000.0, INCOME, LIMITS, non_retirement_need=3_000.0)
    assert result.non_retirement == 3_000.0
    assert result.total == pytest.approx(23_000.0)


def test_larger_match_is_credited_against_bridge_need():
    # Match above 100% of pay: the match captured in step 1 grows once the
    # additional 401(k) dollars are added, and the extra match is credited.
    generous = IncomeProfile(salary=10_000.0, employer_match_pct=2.0)
    result = allocate_contributions(100_000.0, generous, LIMITS, non_retirement_need=15_000.0)
    assert result.employee_contribution == 24_500.0
    assert result.employer_match == 20_000.0
    assert result.rounding_credit == 10_000.0
    assert result.overflow == pytest.approx(58_000.0)
    assert result.non_retirement == pytest.approx(5_000.0 + 58_000.0)


def test_no_income_still_uses_ira_then_401k():
    result = allocate_contributions(10_000.0, IncomeProfile(salary=0.0), LIMITS)
    assert result.employer_match == 0.0
    assert result.ira_contribution == 7_500.0
    assert result.employee_contribution == 2_500.0
    assert result.employee_contribution_pct == 0.0


def test_no_match_rounds_combined_election():
    no_match = IncomeProfile(salary=80_000.0, employer_match_pct=0.0)
    result = allocate_contributions(10_000.0, no_match, LIMITS)
    assert result.employee_contribution == 3_200.0
    assert result.ira_contribution == pytest.approx(6_800.0)
    assert result.total == pytest.approx(10_000.0)


def test_nothing_needed():
    result = allocate_contributions(0.0, INCOME, LIMITS, non_retirement_need=500.0)
    assert result.retirement_total == 0.0
    assert result.non_retirement == 500.0


@pytest.mark.parametrize("need", [0.0, 1.0, 999.0, 4_800.0, 12_345.67, 34_400.0, 250_000.0])
@pytest.mark.parametrize("salary,match", [(0.0, 0.0), (50_000.0, 0.04), (80_000.0, 0.03), (400_000.0, 0.06)])
def test_amounts_non_negative_and_capped(need, salary, match):
    income = IncomeProfile(salary=salary, employer_match_pct=match)
    result = allocate_contributions(need, income, LIMITS, non_retirement_need=100.0)
    for value in (result.employee_contribution, result.employer_match, result.ira_contribution,
                  result.non_retirement, result.rounding_credit, result.overflow):
        assert value >= 0.0
    assert result.employee_contribution <= LIMITS.contribution_limit_401k
    assert result.ira_contribution <= LIMITS.ira_limit
    assert result.employer_match <= income.employer_match_cap


def test_idempotent():
    assert allocate_contributions(20_000.0, INCOME, LIMITS) == allocate_contributions(20_000.0, INCOME, LIMITS)


def test_overflow_is_logged(caplog):
    with caplog.at_level("WARNING", logger="engine.contribution_allocator"):
        allocate_contributions(100_000.0, INCOME, LIMITS)
    assert "shifted to non-retirement" in caplog.text
