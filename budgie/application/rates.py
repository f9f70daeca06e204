"""
Spending rates: what the targets will ask for, and what was actually spent.
"""
from datetime import date

from budgie.domain.events import UNALLOCATED
from budgie.domain.saving_schedule import add_months, round_half_up
from budgie.domain.schedule_merge import CombinedSavingSchedule
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.budget import BudgetProjection
from budgie.readmodels.projectors.targets import TargetRegistryProjection

MONTHS_PER_YEAR = 12


def months_spanned(start: date, end: date) -> int:
    """Calendar months touched by [start, end], at least 1."""
    return max(1, (end.year - start.year) * 12 + end.month - start.month + 1)


class SpendingRateService:

    def __init__(self, store: EventStore):
        self.registry = TargetRegistryProjection(store)
        self.budget = BudgetProjection(store)

    def projected_spending_rate(self, as_of: date) -> int:
        """
        Average monthly accrual of all targets over the next twelve months

        Counts merged schedule ticks dated in [as_of, as_of + 12 months).
        """
        end = add_months(as_of, MONTHS_PER_YEAR)
        schedule = CombinedSavingSchedule(
            (target.schedule(), target.priority)
            for target in self.registry.targets().values()
        )

        total = 0
        for tick in schedule:
            if tick.date >= end:
                break
            if tick.date < as_of:
                continue
            total += tick.amount
        return round_half_up(total, MONTHS_PER_YEAR)

    def historical_expense_rate(self, start: date, end: date) -> int:
        """Average monthly spending against targets over [start, end]"""
        expenses = self.budget.historical_expenses(start, end)
        total = sum(amount for key, amount in expenses.items() if key != UNALLOCATED)
        return round_half_up(total, months_spanned(start, end))
