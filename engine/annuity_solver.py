# annuity_solver.py
#
# Converts a lump sum needed at retirement into a level end-of-year contribution
#

from models import AnnuitySolution


def future_value_shortfall(target: float, current_assets: float, years: float, rate: float) -> float:
    """Amount still missing at retirement after current assets grow untouched."""
    return max(0.0, target - current_assets * (1 + rate) ** years)


def solve_level_contribution(future_value: float, years: float, rate: float) -> AnnuitySolution:
    """
    Level annual payment whose ordinary-annuity future value equals
    `future_value` after `years` years at `rate`.

    With no years left there is no annuity to solve: the whole amount is
    returned as an immediate lump sum instead.
    """
    if years <= 0:
        return AnnuitySolution(annual=0.0, lump_sum=max(0.0, future_value))

    if future_value <= 0:
        return AnnuitySolution(annual=0.0)

    # The geometric factor degenerates at rate 0, fall back to straight line
    if rate > 0:
        annuity_factor = ((1 + rate) ** years - 1) / rate
        return AnnuitySolution(annual=future_value / annuity_factor)

    return AnnuitySolution(annual=future_value / years)
