from dataclasses import replace

import pytest

from models import PlanInputs


def plan_inputs(**overrides) -> PlanInputs:
    """Age 40, retire 65, plan to 95, no assets, $50k/yr growing 2%, 6%/4% returns."""
    values = dict(
        current_age=40,
        retirement_age=65,
        end_age=95,
        penalty_free_age=59.5,
        retirement_balance=0.0,
        non_retirement_balance=0.0,
        withdrawal=50_000.0,
        withdrawal_growth_rate=0.02,
        pre_retirement_return=0.06,
        post_retirement_return=0.04,
        monthly_pension=0.0,
        monthly_social_security=0.0,
        social_security_start_age=67,
        fixed_income_growth_rate=0.0,
        salary=80_000.0,
        bonus=0.0,
        employer_match_pct=0.03,
        contribution_limit_401k=24_500.0,
        ira_limit=7_500.0,
    )
    values.update(overrides)
    return PlanInputs(**values)


@pytest.fixture
def base_inputs() -> PlanInputs:
    return plan_inputs()


@pytest.fixture
def make_inputs():
    return plan_inputs


@pytest.fixture
def with_changes(base_inputs):
    def _with_changes(**changes):
        return replace(base_inputs, **changes)
    return _with_changes
