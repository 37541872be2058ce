# withdrawal_series.py
#
# Net withdrawal stream after retirement: the desired withdrawal grows at its own
# rate, pension and Social Security offset it and grow at the fixed-income rate.
#

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from models import PlanInputs, WithdrawalYear

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WithdrawalStream:
    """
    Withdrawal amounts indexed by t, the number of years since retirement
    (t = 0 is the first retirement year).
    """
    withdrawal: float
    growth_rate: float
    pension_annual: float = 0.0
    social_security_annual: float = 0.0
    social_security_offset_years: float = 0.0
    fixed_income_growth_rate: float = 0.0

    @classmethod
    def from_inputs(cls, inputs: PlanInputs) -> "WithdrawalStream":
        return cls(
            withdrawal=inputs.withdrawal,
            growth_rate=inputs.withdrawal_growth_rate,
            pension_annual=inputs.pension_annual,
            social_security_annual=inputs.social_security_annual,
            social_security_offset_years=inputs.social_security_offset_years,
            fixed_income_growth_rate=inputs.fixed_income_growth_rate,
        )

    def _components(self, t):
        """Gross withdrawal, pension and Social Security for a year index or an array of them."""
        t = np.asarray(t, dtype=float)
        base = self.withdrawal * np.power(1 + self.growth_rate, t)
        pension = self.pension_annual * np.power(1 + self.fixed_income_growth_rate, t)

        # Social Security grows from its own first payment, not from retirement
        ss_years = t - self.social_security_offset_years
        social_security = np.where(
            ss_years >= 0,
            self.social_security_annual * np.power(1 + self.fixed_income_growth_rate, np.maximum(ss_years, 0.0)),
            0.0,
        )
        return base, pension, social_security

    def year(self, t: float) -> WithdrawalYear:
        base, pension, social_security = self._components(t)
        return WithdrawalYear(t=t, base=float(base), pension=float(pension), social_security=float(social_security))

    def schedule(self, horizon: float) -> List[WithdrawalYear]:
        return [self.year(float(t)) for t in _year_index(horizon)]

    def net_amounts(self, horizon: float) -> np.ndarray:
        """Vector of max(0, base - pension - ss) for t = 0 .. horizon-1."""
        base, pension, social_security = self._components(_year_index(horizon))
        return np.maximum(0.0, base - pension - social_security)

    def present_value(self, horizon: float, discount_rate: float) -> float:
        """
        Value at retirement of the first `horizon` net withdrawals. Each
        withdrawal falls at the end of its retirement year, so year t is
        discounted over t+1 periods.
        """
        if horizon <= 0:
            return 0.0

        t = _year_index(horizon)
        net = self.net_amounts(horizon)
        pv = float(np.sum(net / np.power(1 + discount_rate, t + 1)))

        logger.debug(f"PV of {len(t)} withdrawal years at {discount_rate:.4f}: {pv:,.2f}")
        return pv


def _year_index(horizon: float) -> np.ndarray:
    # t = 0, 1, 2, ... while t < horizon (a 4.5 year window covers 5 withdrawals)
    if horizon <= 0:
        return np.zeros(0, dtype=float)
    return np.arange(0, horizon, 1.0, dtype=float)
