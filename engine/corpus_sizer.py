# corpus_sizer.py
#
# Sizes the portfolio needed at retirement and the annual saving to get there
#

import logging

from models import PlanInputs, CorpusSizing
from engine.withdrawal_series import WithdrawalStream
from engine.annuity_solver import future_value_shortfall, solve_level_contribution

logger = logging.getLogger(__name__)


def target_corpus(inputs: PlanInputs) -> float:
    """Present value at retirement of every net withdrawal through end_age."""
    stream = WithdrawalStream.from_inputs(inputs)
    return stream.present_value(inputs.years_in_retirement, inputs.post_retirement_return)


def size_corpus(inputs: PlanInputs) -> CorpusSizing:
    """
    Target corpus plus the level annual saving (or, when already at retirement,
    the lump sum) that closes the gap left by today's assets.
    """
    target = target_corpus(inputs)
    n = inputs.years_to_retirement

    if n == 0:
        lump = max(0.0, target - inputs.current_assets)
        logger.debug(f"Retiring now: corpus {target:,.2f}, lump sum needed {lump:,.2f}")
        return CorpusSizing(target_corpus=target, required_annual_saving=0.0, lump_sum_if_retiring_now=lump)

    needed_fv = future_value_shortfall(target, inputs.current_assets, n, inputs.pre_retirement_return)
    solution = solve_level_contribution(needed_fv, n, inputs.pre_retirement_return)

    logger.debug(
        f"Corpus {target:,.2f} over {inputs.years_in_retirement} years; "
        f"shortfall at retirement {needed_fv:,.2f} -> {solution.annual:,.2f}/yr for {n} years"
    )
    return CorpusSizing(target_corpus=target, required_annual_saving=solution.annual)
