"""
Saving target - derived from CreateTarget events by the target registry
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from budgie.domain.saving_schedule import SavingSchedule


@dataclass(frozen=True)
class Target:
    """
    A named recurring savings goal

    values is the ordered value history: (effective_date, amount) pairs,
    where amount None ends the schedule from that date on.
    """
    name: str
    cadence: str
    priority: int
    values: Tuple[Tuple[date, Optional[int]], ...]

    @property
    def current_value(self) -> Optional[int]:
        """Most recently effective amount (None once the target is retired)."""
        return self.values[-1][1] if self.values else None

    def schedule(self) -> SavingSchedule:
        """Fresh saving schedule for this target."""
        return SavingSchedule(self.name, self.cadence, self.values)

    def amended(self, effective_date: date, amount: Optional[int], priority: int) -> "Target":
        """Copy with one more value-history entry, kept in date order."""
        values = sorted(self.values + ((effective_date, amount),), key=lambda entry: entry[0])
        return Target(
            name=self.name,
            cadence=self.cadence,
            priority=priority,
            values=tuple(values),
        )
