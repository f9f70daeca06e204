"""
Runway service: how far into the future each target is backed by real money.

The merged saving schedule of all targets is walked in (date, priority)
order. Each tick first pays down what the target has already spent; only
the rest needs fresh money from the total balance. The walk stops at the
first tick that cannot be afforded, for every target at once, so a cheaper
tick of a less important target is never funded ahead of its turn.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Optional

from budgie.config import get_settings
from budgie.domain.saving_schedule import add_months, round_half_up
from budgie.domain.schedule_merge import CombinedSavingSchedule
from budgie.domain.target import Target
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.budget import BudgetProjection
from budgie.readmodels.projectors.ledger import LedgerProjection
from budgie.readmodels.projectors.targets import TargetRegistryProjection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunwayAllocation:
    funded_through: Dict[str, Optional[date]]
    total_allocation: int
    total_balance: int
    stopped_at: Optional[date] = field(default=None)


def allocate_runway(
    targets: Iterable[Target],
    total_balance: int,
    expenditures: Dict[str, int],
    overspend: Dict[str, int],
    horizon: Optional[date] = None,
) -> RunwayAllocation:
    """
    Greedy allocation of total_balance across the merged schedule

    Args:
        targets: Targets to fund
        total_balance: Money available across all accounts
        expenditures: Net spending per target so far; ticks pay this down
            before any new money is allocated
        overspend: Per target, how far its budget is below zero
        horizon: Ticks after this date are not considered

    Returns:
        RunwayAllocation with the last funded tick date per target
        (None when not even the first tick is funded)
    """
    targets = list(targets)
    owed = dict(expenditures)
    funded_through: Dict[str, Optional[date]] = {target.name: None for target in targets}
    schedule = CombinedSavingSchedule((target.schedule(), target.priority) for target in targets)

    total_allocation = 0
    stopped_at = None
    while total_allocation < total_balance:
        tick = schedule.next_tick()
        if tick is None:
            break
        if horizon is not None and tick.date > horizon:
            stopped_at = tick.date
            break

        available = 0
        bucket = owed.get(tick.target, 0) - tick.amount
        if bucket < 0:
            available = -bucket
            bucket = 0
        owed[tick.target] = bucket

        if available + overspend.get(tick.target, 0) + total_allocation <= total_balance:
            total_allocation += available
            funded_through[tick.target] = tick.date
        else:
            stopped_at = tick.date
            break

    return RunwayAllocation(
        funded_through=funded_through,
        total_allocation=total_allocation,
        total_balance=total_balance,
        stopped_at=stopped_at,
    )


def first_of_months(start: date, end: date) -> list[date]:
    """First-of-month dates within [start, end]."""
    current = start if start.day == 1 else add_months(start.replace(day=1), 1)
    out: list[date] = []
    while current <= end:
        out.append(current)
        current = add_months(current, 1)
    return out


def weeks_between(start: date, end: date) -> int:
    return round_half_up((end - start).days, 7)


class RunwayService:
    """Runway as of a date, and its evolution over time."""

    def __init__(self, store: EventStore):
        self.store = store
        self.ledger = LedgerProjection(store)
        self.registry = TargetRegistryProjection(store)
        self.budget = BudgetProjection(store)

    def allocation(self, as_of: date) -> RunwayAllocation:
        targets = self.registry.targets()
        budgets = self.budget.budgets(as_of)
        overspend = {name: max(0, -amount) for name, amount in budgets.items()}
        horizon_years = get_settings().RUNWAY_HORIZON_YEARS

        result = allocate_runway(
            targets.values(),
            total_balance=self.ledger.total_balance(as_of),
            expenditures=self.budget.expenditures_by_target(as_of),
            overspend=overspend,
            horizon=add_months(as_of, 12 * horizon_years),
        )
        logger.debug(
            "Runway as of %s: allocated %s of %s",
            as_of, result.total_allocation, result.total_balance,
        )
        return result

    def runway(self, as_of: date) -> Dict[str, Optional[date]]:
        """Funded-through date per target (None = not funded at all)"""
        return self.allocation(as_of).funded_through

    def runway_trend(self, start: date, end: date) -> Dict[date, int]:
        """
        Shortest runway in whole weeks on each first of the month in [start, end]

        Targets with no funded tick are left out of the minimum; a month
        where no target is funded reports 0.
        """
        trend: Dict[date, int] = {}
        for day in first_of_months(start, end):
            funded = [d for d in self.runway(day).values() if d is not None]
            trend[day] = weeks_between(day, min(funded)) if funded else 0
        return trend
