# contribution_allocator.py
#
# Splits the required annual retirement saving across savings vehicles in priority order:
#   1) employee 401(k) up to the employer match (captures the free money)
#   2) IRA up to its limit
#   3) additional 401(k) up to the deferral limit
#   4) reconcile the whole-percent rounding of the 401(k) election
#   5) anything the caps could not absorb overflows to non-retirement saving
#
# Every step takes the remaining need and returns its amounts plus the new remaining
# need; nothing is mutated between steps.
#

import logging
import math
from dataclasses import dataclass

from config.planning_assumptions import PERCENT_ROUNDING_DIGITS
from models import AllocationResult, ContributionLimits, IncomeProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchStep:
    employee: float
    employer_match: float
    remaining_need: float


@dataclass(frozen=True)
class CappedStep:
    amount: float
    remaining_need: float


@dataclass(frozen=True)
class RoundingStep:
    employee: float
    ira: float
    employer_match: float
    rounding_credit: float


def round_contribution_percent_up(amount: float, gross_pay: float, limit: float) -> float:
    """
    Express `amount` as a percent of gross pay, round that percent UP to the next
    whole percent and convert back to dollars, capped at `limit`.

    Payroll elections are whole percents; rounding up (never down) keeps the
    dollar target met. Expects 0 <= amount <= limit and guarantees
    amount <= result <= limit.
    """
    if gross_pay <= 0:
        return amount

    pct = round(amount / gross_pay * 100.0, PERCENT_ROUNDING_DIGITS)
    rounded = gross_pay * math.ceil(pct) / 100.0
    return min(max(amount, rounded), limit)


def capture_employer_match(need: float, income: IncomeProfile, limits: ContributionLimits) -> MatchStep:
    gross_pay = income.gross_pay
    match_cap = income.employer_match_cap
    employee_cap = limits.contribution_limit_401k

    if gross_pay <= 0 or match_cap <= 0 or need <= 0:
        return MatchStep(employee=0.0, employer_match=0.0, remaining_need=max(0.0, need))

    # Each employee dollar is matched by an employer dollar, so the pair
    # consumes twice the employee amount from the need.
    employee = min(gross_pay, employee_cap, match_cap, need / 2)
    if employee < employee_cap:
        employee = round_contribution_percent_up(employee, gross_pay, employee_cap)

    employer_match = min(match_cap, employee)
    remaining = max(0.0, need - (employee + employer_match))
    return MatchStep(employee=employee, employer_match=employer_match, remaining_need=remaining)


def fill_ira(need: float, limits: ContributionLimits) -> CappedStep:
    amount = min(limits.ira_limit, need)
    return CappedStep(amount=max(0.0, amount), remaining_need=max(0.0, need - amount))


def fill_additional_401k(need: float, employee_for_match: float, limits: ContributionLimits) -> CappedStep:
    room = max(0.0, limits.contribution_limit_401k - employee_for_match)
    amount = max(0.0, min(need, room))
    return CappedStep(amount=amount, remaining_need=max(0.0, need - amount))


def reconcile_rounding(employee_total: float,
                       ira: float,
                       match_applied: float,
                       income: IncomeProfile,
                       limits: ContributionLimits) -> RoundingStep:
    """
    Round the combined 401(k) election up to a whole percent. The extra employee
    dollars come out of the IRA; a larger employer match becomes a credit
    against the non-retirement need.
    """
    employee = employee_total
    if 0 < employee_total < limits.contribution_limit_401k:
        employee = round_contribution_percent_up(employee_total, income.gross_pay, limits.contribution_limit_401k)
        if employee != employee_total:
            ira = max(0.0, ira - (employee - employee_total))

    employer_match = min(income.employer_match_cap, employee)
    rounding_credit = max(0.0, employer_match - match_applied)
    return RoundingStep(employee=employee, ira=ira, employer_match=employer_match, rounding_credit=rounding_credit)


def allocate_contributions(required_annual_saving: float,
                           income: IncomeProfile,
                           limits: ContributionLimits,
                           non_retirement_need: float = 0.0) -> AllocationResult:
    """
    Waterfall allocation of the annual retirement saving.

    Args:
        required_annual_saving: Annual amount that must go into retirement savings.
        income: Salary, bonus and employer match percentage.
        limits: 401(k) deferral and IRA contribution limits.
        non_retirement_need: Annual non-retirement saving already required
            (bridge funding); rounding credits reduce it, overflow adds to it.

    Returns:
        AllocationResult with every amount non-negative.
    """
    need = max(0.0, required_annual_saving)

    match_step = capture_employer_match(need, income, limits)
    ira_step = fill_ira(match_step.remaining_need, limits)
    extra_step = fill_additional_401k(ira_step.remaining_need, match_step.employee, limits)

    rounding = reconcile_rounding(
        employee_total=match_step.employee + extra_step.amount,
        ira=ira_step.amount,
        match_applied=match_step.employer_match,
        income=income,
        limits=limits,
    )

    non_retirement = max(0.0, non_retirement_need)
    if rounding.rounding_credit > 0:
        non_retirement = max(0.0, non_retirement - rounding.rounding_credit)

    overflow = extra_step.remaining_need
    if overflow > 0:
        logger.warning(
            f"Contribution limits reached; {overflow:,.2f}/yr shifted to non-retirement savings"
        )
        non_retirement += overflow

    gross_pay = income.gross_pay
    employee_pct = rounding.employee / gross_pay * 100.0 if gross_pay > 0 else 0.0

    result = AllocationResult(
        employee_contribution=rounding.employee,
        employee_contribution_pct=employee_pct,
        employer_match=rounding.employer_match,
        ira_contribution=rounding.ira,
        non_retirement=non_retirement,
        rounding_credit=rounding.rounding_credit,
        overflow=overflow,
    )
    logger.debug(f"Allocation for {need:,.2f}/yr: {result}")
    return result
