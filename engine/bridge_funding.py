# bridge_funding.py
#
# Retirement accounts are treated as locked until the penalty-free age, so the
# years between retirement and that age must be covered from non-retirement savings.
#

import logging
from typing import Optional

from models import PlanInputs, BridgeFunding, ContributionSchedule
from engine.withdrawal_series import WithdrawalStream
from engine.annuity_solver import solve_level_contribution
from engine.balance_projector import balances_at

logger = logging.getLogger(__name__)


def size_bridge_funding(inputs: PlanInputs, projected_non_retirement: Optional[float] = None) -> BridgeFunding:
    """
    Non-retirement money needed at retirement to fund the early window, and the
    saving required to build it.

    Args:
        inputs: Validated planner inputs.
        projected_non_retirement: Non-retirement balance expected at retirement.
            Defaults to a projection of today's balance with no new contributions.
    """
    early_years = inputs.early_years
    stream = WithdrawalStream.from_inputs(inputs)
    early_needed = stream.present_value(early_years, inputs.post_retirement_return)

    if projected_non_retirement is None:
        snapshot = balances_at(inputs, inputs.retirement_age, ContributionSchedule())
        projected_non_retirement = snapshot.non_retirement_balance

    shortfall = max(0.0, early_needed - projected_non_retirement)
    solution = solve_level_contribution(shortfall, inputs.years_to_retirement, inputs.pre_retirement_return)

    if early_years > 0:
        logger.debug(
            f"Bridge of {early_years} years needs {early_needed:,.2f}; "
            f"projected non-retirement {projected_non_retirement:,.2f}, shortfall {shortfall:,.2f}"
        )

    return BridgeFunding(
        early_years=early_years,
        early_needed=early_needed,
        projected_non_retirement=projected_non_retirement,
        shortfall=shortfall,
        annual_saving=solution.annual,
        lump_sum=solution.lump_sum,
    )
