# savings_planner.py
#
# Full recommendation pipeline: corpus -> bridge funding -> retirement gap ->
# contribution waterfall -> projected balances with the recommended schedule.
#

import logging

from models import PlanInputs, SavingsPlan, ContributionSchedule
from engine.corpus_sizer import size_corpus
from engine.bridge_funding import size_bridge_funding
from engine.annuity_solver import solve_level_contribution
from engine.contribution_allocator import allocate_contributions
from engine.balance_projector import BalanceProjector, balances_at
from utils.currency import format_currency, format_percent_output

logger = logging.getLogger(__name__)


def build_savings_plan(inputs: PlanInputs) -> SavingsPlan:
    """
    Recommend an annual savings split that funds the retirement withdrawals
    through end_age, and verify it by projecting both balance buckets.
    """
    sizing = size_corpus(inputs)

    # Where today's balances land at retirement if nothing more is saved
    baseline = balances_at(inputs, inputs.retirement_age, ContributionSchedule())

    bridge = size_bridge_funding(inputs, projected_non_retirement=baseline.non_retirement_balance)

    # Corpus still missing once projected balances and the bridge money are counted
    retirement_gap = max(
        0.0,
        sizing.target_corpus - (baseline.retirement_balance + baseline.non_retirement_balance + bridge.shortfall),
    )
    additional = solve_level_contribution(retirement_gap, inputs.years_to_retirement, inputs.pre_retirement_return)

    allocation = allocate_contributions(
        additional.annual,
        inputs.income,
        inputs.limits,
        non_retirement_need=bridge.annual_saving,
    )
    schedule = ContributionSchedule.from_allocation(allocation)

    at_retirement = balances_at(inputs, inputs.retirement_age, schedule)

    # Stop one year past end_age so the end_age withdrawal itself is simulated
    projector = BalanceProjector(inputs, schedule, inputs.end_age + 1)
    at_end_age = balances_at(inputs, inputs.end_age, schedule)
    depleted_at = projector.depletion_age()

    plan = SavingsPlan(
        inputs=inputs,
        sizing=sizing,
        bridge=bridge,
        retirement_gap=retirement_gap,
        additional_retirement=additional,
        allocation=allocation,
        schedule=schedule,
        at_retirement=at_retirement,
        at_end_age=at_end_age,
        depletion_age=depleted_at,
    )

    logger.info(
        f"Target corpus {format_currency(sizing.target_corpus)}; "
        f"save {format_currency(plan.total_annual_saving)}/yr "
        f"(401k {format_currency(allocation.employee_contribution)} "
        f"= {format_percent_output(allocation.employee_contribution_pct / 100)} of pay, "
        f"match {format_currency(allocation.employer_match)}, "
        f"IRA {format_currency(allocation.ira_contribution)}, "
        f"non-retirement {format_currency(allocation.non_retirement)})"
    )
    if not plan.is_funded:
        logger.warning(f"Balances run out at age {depleted_at}, before end age {inputs.end_age}")

    return plan
