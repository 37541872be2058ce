# balance_projector.py
#
# Year-by-year roll-forward of the two balance buckets (retirement / non-retirement).
# Before retirement both buckets grow and receive contributions at year end; from
# retirement on they grow and the year's net withdrawal is taken at year end,
# non-retirement money first.
#

import logging
from collections import deque
from typing import Iterator, Optional, Tuple

import pandas as pd

from config.planning_assumptions import DEPLETION_TOLERANCE
from models import PlanInputs, ContributionSchedule, BalanceSnapshot
from engine.withdrawal_series import WithdrawalStream

logger = logging.getLogger(__name__)


class BalanceProjector:
    """
    Restartable sequence of BalanceSnapshots from current_age to target_age.

    Every iteration replays the simulation from the same inputs, so the
    projector can be iterated any number of times (charting reads every
    snapshot, verification only the last).
    """
    def __init__(self,
                 inputs: PlanInputs,
                 schedule: Optional[ContributionSchedule] = None,
                 target_age: Optional[float] = None):
        self.inputs = inputs
        self.schedule = schedule or ContributionSchedule()
        self.target_age = inputs.end_age if target_age is None else target_age
        self.stream = WithdrawalStream.from_inputs(inputs)

    def __iter__(self) -> Iterator[BalanceSnapshot]:
        return (snap for snap, _ in self._simulate())

    def _simulate(self) -> Iterator[Tuple[BalanceSnapshot, float]]:
        """
        Pairs every snapshot with the withdrawal the buckets could not pay in
        the year that ends there (0 for the starting snapshot and while saving).
        """
        inputs = self.inputs
        age = inputs.current_age
        ret_bal = float(inputs.retirement_balance)
        nonret_bal = float(inputs.non_retirement_balance)
        unpaid = 0.0

        while True:
            yield BalanceSnapshot(age=age, retirement_balance=ret_bal, non_retirement_balance=nonret_bal), unpaid
            if age >= self.target_age:
                return

            if age < inputs.retirement_age:
                ret_bal, nonret_bal = self._accumulate(ret_bal, nonret_bal)
                unpaid = 0.0
            else:
                ret_bal, nonret_bal, unpaid = self._decumulate(age, ret_bal, nonret_bal)
            age += 1

    def _accumulate(self, ret_bal: float, nonret_bal: float):
        rate = self.inputs.pre_retirement_return
        ret_bal = ret_bal * (1 + rate) + self.schedule.retirement
        nonret_bal = nonret_bal * (1 + rate) + self.schedule.non_retirement
        return ret_bal, nonret_bal

    def _decumulate(self, age: float, ret_bal: float, nonret_bal: float):
        rate = self.inputs.post_retirement_return
        ret_bal = ret_bal * (1 + rate)
        nonret_bal = nonret_bal * (1 + rate)

        to_withdraw = self.stream.year(age - self.inputs.retirement_age).net

        # Non-retirement money first, only the excess comes out of retirement accounts
        from_nonret = min(nonret_bal, to_withdraw)
        nonret_bal = max(0.0, nonret_bal - from_nonret)
        to_withdraw -= from_nonret

        from_ret = max(0.0, min(ret_bal, to_withdraw))
        ret_bal = max(0.0, ret_bal - from_ret)
        unpaid = max(0.0, to_withdraw - from_ret)
        return ret_bal, nonret_bal, unpaid

    def final(self) -> BalanceSnapshot:
        return deque(self, maxlen=1)[0]

    def depletion_age(self, tolerance: float = DEPLETION_TOLERANCE) -> Optional[float]:
        """
        Age of the first simulated retirement year whose withdrawal the buckets
        could not fully pay (more than `tolerance` dollars short). None if every
        year up to target_age is paid.
        """
        for snap, unpaid in self._simulate():
            if unpaid > tolerance:
                return snap.age - 1
        return None


def project_balances(inputs: PlanInputs,
                     schedule: Optional[ContributionSchedule] = None,
                     target_age: Optional[float] = None) -> BalanceProjector:
    return BalanceProjector(inputs, schedule, target_age)


def balances_at(inputs: PlanInputs,
                target_age: float,
                schedule: Optional[ContributionSchedule] = None) -> BalanceSnapshot:
    """Balances after every simulated year that starts before target_age."""
    return BalanceProjector(inputs, schedule, target_age).final()


def balances_frame(inputs: PlanInputs,
                   schedule: Optional[ContributionSchedule] = None,
                   end_age: Optional[float] = None) -> pd.DataFrame:
    """
    Chart data: one row per simulated age with both balances and the year's
    desired (gross) and investment-funded (net) withdrawal.
    """
    end_age = inputs.chart_end_age if end_age is None else end_age
    projector = BalanceProjector(inputs, schedule, end_age)

    rows = []
    for snap in projector:
        desired = 0.0
        from_investments = 0.0
        if snap.age >= inputs.retirement_age:
            year = projector.stream.year(snap.age - inputs.retirement_age)
            desired = year.base
            from_investments = year.net

        rows.append({
            "age": snap.age,
            "retirement_balance": snap.retirement_balance,
            "non_retirement_balance": snap.non_retirement_balance,
            "total_balance": snap.total,
            "desired_withdrawal": desired,
            "investment_withdrawal": from_investments,
        })

    return pd.DataFrame(rows, columns=[
        "age",
        "retirement_balance",
        "non_retirement_balance",
        "total_balance",
        "desired_withdrawal",
        "investment_withdrawal",
    ])
