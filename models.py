# models.py
import math
from dataclasses import dataclass, fields
from typing import Optional

from config.planning_assumptions import (
    DEFAULT_CONTRIBUTION_LIMIT_401K,
    DEFAULT_IRA_LIMIT,
    MONTHS_PER_YEAR,
)


def _check_finite(record, names):
    for name in names:
        value = getattr(record, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")


def _check_non_negative(record, names):
    for name in names:
        if getattr(record, name) < 0:
            raise ValueError(f"{name} must not be negative, got {getattr(record, name)!r}")


def _check_rates(record, names):
    for name in names:
        if getattr(record, name) <= -1.0:
            raise ValueError(f"{name} must be greater than -100%, got {getattr(record, name)!r}")


@dataclass(frozen=True)
class ContributionLimits:
    contribution_limit_401k: float = DEFAULT_CONTRIBUTION_LIMIT_401K
    ira_limit: float = DEFAULT_IRA_LIMIT

    def __post_init__(self):
        names = [f.name for f in fields(self)]
        _check_finite(self, names)
        _check_non_negative(self, names)


@dataclass(frozen=True)
class IncomeProfile:
    salary: float
    bonus: float = 0.0
    employer_match_pct: float = 0.0   # fraction of gross pay, e.g. 0.03

    def __post_init__(self):
        names = [f.name for f in fields(self)]
        _check_finite(self, names)
        _check_non_negative(self, names)

    @property
    def gross_pay(self) -> float:
        return self.salary + self.bonus

    @property
    def employer_match_cap(self) -> float:
        return self.gross_pay * self.employer_match_pct


@dataclass(frozen=True)
class PlanInputs:
    """
    Validated numeric planner parameters. Rates are fractions (0.06 = 6%),
    ages are whole or half years, fixed incomes are monthly amounts.
    """
    # Timeline
    current_age: float
    retirement_age: float
    end_age: float
    penalty_free_age: float

    # Balances
    retirement_balance: float
    non_retirement_balance: float

    # Spending goal
    withdrawal: float
    withdrawal_growth_rate: float

    # Returns
    pre_retirement_return: float
    post_retirement_return: float

    # Fixed income
    monthly_pension: float
    monthly_social_security: float
    social_security_start_age: float
    fixed_income_growth_rate: float

    # Employment
    salary: float
    bonus: float
    employer_match_pct: float

    # Contribution limits (caller-supplied configuration)
    contribution_limit_401k: float = DEFAULT_CONTRIBUTION_LIMIT_401K
    ira_limit: float = DEFAULT_IRA_LIMIT

    def __post_init__(self):
        _check_finite(self, [f.name for f in fields(self)])
        _check_rates(self, [
            "withdrawal_growth_rate",
            "pre_retirement_return",
            "post_retirement_return",
            "fixed_income_growth_rate",
        ])
        _check_non_negative(self, [
            "current_age", "retirement_age", "end_age", "penalty_free_age",
            "retirement_balance", "non_retirement_balance", "withdrawal",
            "monthly_pension", "monthly_social_security", "social_security_start_age",
            "salary", "bonus", "employer_match_pct",
            "contribution_limit_401k", "ira_limit",
        ])

    # --- Fixed income, annualized
    @property
    def pension_annual(self) -> float:
        return self.monthly_pension * MONTHS_PER_YEAR

    @property
    def social_security_annual(self) -> float:
        return self.monthly_social_security * MONTHS_PER_YEAR

    @property
    def social_security_offset_years(self) -> float:
        return max(0, self.social_security_start_age - self.retirement_age)

    # --- Horizons (never negative)
    @property
    def years_to_retirement(self) -> float:
        return max(0, self.retirement_age - self.current_age)

    @property
    def years_in_retirement(self) -> float:
        return max(0, self.end_age - self.retirement_age + 1)

    @property
    def early_years(self) -> float:
        return max(0, self.penalty_free_age - self.retirement_age)

    @property
    def chart_end_age(self) -> float:
        return max(self.end_age, self.penalty_free_age, self.retirement_age)

    @property
    def current_assets(self) -> float:
        return self.retirement_balance + self.non_retirement_balance

    @property
    def gross_pay(self) -> float:
        return self.salary + self.bonus

    @property
    def income(self) -> IncomeProfile:
        return IncomeProfile(
            salary=self.salary,
            bonus=self.bonus,
            employer_match_pct=self.employer_match_pct,
        )

    @property
    def limits(self) -> ContributionLimits:
        return ContributionLimits(
            contribution_limit_401k=self.contribution_limit_401k,
            ira_limit=self.ira_limit,
        )


@dataclass(frozen=True)
class WithdrawalYear:
    t: float                  # years since retirement, 0 = first retirement year
    base: float
    pension: float
    social_security: float

    @property
    def net(self) -> float:
        return max(0.0, self.base - self.pension - self.social_security)


@dataclass(frozen=True)
class AnnuitySolution:
    annual: float = 0.0
    lump_sum: Optional[float] = None   # set only when there are no years left to save


@dataclass(frozen=True)
class CorpusSizing:
    target_corpus: float
    required_annual_saving: float
    lump_sum_if_retiring_now: Optional[float] = None


@dataclass(frozen=True)
class BridgeFunding:
    early_years: float
    early_needed: float
    projected_non_retirement: float
    shortfall: float
    annual_saving: float
    lump_sum: Optional[float] = None


@dataclass(frozen=True)
class AllocationResult:
    employee_contribution: float = 0.0
    employee_contribution_pct: float = 0.0
    employer_match: float = 0.0
    ira_contribution: float = 0.0
    non_retirement: float = 0.0
    rounding_credit: float = 0.0
    overflow: float = 0.0

    @property
    def retirement_total(self) -> float:
        return self.employee_contribution + self.employer_match + self.ira_contribution

    @property
    def total(self) -> float:
        return self.retirement_total + self.non_retirement


@dataclass(frozen=True)
class ContributionSchedule:
    retirement: float = 0.0
    non_retirement: float = 0.0

    @classmethod
    def from_allocation(cls, allocation: AllocationResult) -> "ContributionSchedule":
        return cls(
            retirement=allocation.retirement_total,
            non_retirement=allocation.non_retirement,
        )


@dataclass(frozen=True)
class BalanceSnapshot:
    age: float
    retirement_balance: float
    non_retirement_balance: float

    @property
    def total(self) -> float:
        return self.retirement_balance + self.non_retirement_balance


@dataclass(frozen=True)
class SavingsPlan:
    inputs: PlanInputs
    sizing: CorpusSizing
    bridge: BridgeFunding
    retirement_gap: float
    additional_retirement: AnnuitySolution
    allocation: AllocationResult
    schedule: ContributionSchedule
    at_retirement: BalanceSnapshot
    at_end_age: BalanceSnapshot
    depletion_age: Optional[float] = None

    @property
    def total_annual_saving(self) -> float:
        return self.allocation.total

    @property
    def lump_sum_needed(self) -> float:
        return (self.bridge.lump_sum or 0.0) + (self.additional_retirement.lump_sum or 0.0)

    @property
    def is_funded(self) -> bool:
        return self.depletion_age is None or self.depletion_age > self.inputs.end_age
