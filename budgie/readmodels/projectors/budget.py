"""
BudgetProjection - accrued budgets and spending per target

A target's budget is what its saving schedule has accrued so far plus the
net of everything itemized against it. Unallocated amounts ("_") never touch
a budget.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from budgie.domain.events import EVENT_TRANSACT, UNALLOCATED, Event
from budgie.domain.saving_schedule import accrued_through
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.base import BaseProjection
from budgie.readmodels.projectors.targets import TargetRegistryProjection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetBudget:
    name: str
    cadence: str
    priority: int
    current_value: Optional[int]
    accrued: int


class BudgetProjection(BaseProjection):

    def __init__(self, store: EventStore):
        super().__init__(store, projection_name="budget")
        self.registry = TargetRegistryProjection(store)

    def budgets(self, as_of: date) -> Dict[str, int]:
        """
        Current budget balance of every target

        Accrual counts schedule ticks dated on or before `as_of`. Itemized
        transaction amounts are netted over the whole log regardless of
        their date, so a future-dated transaction already shows up in an
        earlier query.
        """
        targets = self.registry.targets()
        accrued = {
            name: accrued_through(target.schedule(), as_of)
            for name, target in targets.items()
        }

        def fold(result: Dict[str, int], event: Event) -> Dict[str, int]:
            if event.type != EVENT_TRANSACT:
                return result
            updated = result
            for key, amount in event.itemized_amounts.items():
                if key == UNALLOCATED:
                    continue
                if key not in updated:
                    logger.warning("Ignoring %s itemized to unknown target %s", amount, key)
                    continue
                updated = {**updated, key: updated[key] + amount}
            return updated

        return self.run(fold, accrued)

    def budget_summaries(self, as_of: date) -> List[TargetBudget]:
        """Targets with their current rate and accrued budget, sorted by name"""
        targets = self.registry.targets()
        budgets = self.budgets(as_of)
        return [
            TargetBudget(
                name=name,
                cadence=targets[name].cadence,
                priority=targets[name].priority,
                current_value=targets[name].current_value,
                accrued=budgets[name],
            )
            for name in sorted(targets)
        ]

    def expenditures_by_target(self, as_of: date) -> Dict[str, int]:
        """
        Net spending per target up to a date (inclusive)

        Debits increase a target's expenditure, credits (refunds) reduce it.
        """
        def fold(result: Dict[str, int], event: Event) -> Dict[str, int]:
            if event.type != EVENT_TRANSACT or event.date > as_of:
                return result
            updated = result
            for key, amount in event.itemized_amounts.items():
                if key == UNALLOCATED:
                    continue
                updated = {**updated, key: updated.get(key, 0) - amount}
            return updated

        return self.run(fold, {})

    def historical_expenses(self, start: date, end: date) -> Dict[str, int]:
        """
        Expenses per itemization key over [start, end]

        Includes the unallocated key. Allocated credits count as refunds and
        reduce the total; unallocated credits are income and are skipped.
        Transfers are not expenses.
        """
        def fold(result: Dict[str, int], event: Event) -> Dict[str, int]:
            if event.type != EVENT_TRANSACT or not (start <= event.date <= end):
                return result
            updated = result
            for key, amount in event.itemized_amounts.items():
                if key == UNALLOCATED and amount > 0:
                    continue
                updated = {**updated, key: updated.get(key, 0) - amount}
            return updated

        return self.run(fold, {})
