"""
Saving schedule generator

Turns one target's value history into a lazy, possibly infinite sequence of
weekly accrual ticks. Uses date only (no timezone).

Cadences:
- WEEKLY: 1 tick per deadline, deadlines every 7 days
- MONTHLY: 4 ticks per deadline, deadlines every calendar month
- YEARLY: 52 ticks per deadline, deadlines every calendar year

Ticks for a deadline are spaced 7 days apart and end exactly on the deadline.
The earliest tick absorbs the rounding remainder so a deadline's ticks always
sum to the target value.
"""
import calendar
from bisect import bisect_right
from collections import deque
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Optional, Sequence, Tuple

from budgie.domain.errors import EmptyScheduleDefinition, InvalidCadence


CADENCE_WEEKLY = "WEEKLY"
CADENCE_MONTHLY = "MONTHLY"
CADENCE_YEARLY = "YEARLY"
VALID_CADENCES = frozenset({CADENCE_WEEKLY, CADENCE_MONTHLY, CADENCE_YEARLY})

TICKS_PER_DEADLINE = {
    CADENCE_WEEKLY: 1,
    CADENCE_MONTHLY: 4,
    CADENCE_YEARLY: 52,
}

TICK_SPACING = timedelta(days=7)


@dataclass(frozen=True)
class ScheduleTick:
    target: str
    date: date
    amount: int


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, n: int) -> date:
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    last = last_day_of_month(year, month)
    day = min(d.day, last)
    return date(year, month, day)


def round_half_up(numerator: int, denominator: int) -> int:
    """Integer division rounding .5 towards +infinity (denominator > 0)."""
    return (2 * numerator + denominator) // (2 * denominator)


def normalize_cadence(cadence: str) -> str:
    normalized = str(cadence).strip().upper()
    if normalized not in VALID_CADENCES:
        raise InvalidCadence(cadence)
    return normalized


def nth_deadline(cadence: str, anchor: date, index: int) -> date:
    """
    Deadline number `index` counted from `anchor`

    Computed from the anchor rather than the previous deadline, so a
    month-end anchor (Jan 31) comes back to the 31st after a short month.
    """
    if cadence == CADENCE_WEEKLY:
        return anchor + timedelta(days=7 * index)
    if cadence == CADENCE_MONTHLY:
        return add_months(anchor, index)
    if cadence == CADENCE_YEARLY:
        return add_months(anchor, 12 * index)
    raise InvalidCadence(cadence)


def split_deadline(target: str, deadline: date, amount: int, ticks: int) -> list[ScheduleTick]:
    """Split one deadline's amount into `ticks` weekly ticks ending on the deadline."""
    weekly = round_half_up(amount, ticks)
    first = amount - weekly * (ticks - 1)
    out: list[ScheduleTick] = []
    for i in range(ticks):
        tick_date = deadline - TICK_SPACING * (ticks - 1 - i)
        out.append(ScheduleTick(target=target, date=tick_date, amount=first if i == 0 else weekly))
    return out


class SavingSchedule:
    """
    Pull-based cursor over one target's saving ticks

    next_tick() returns the next ScheduleTick, or None once the value history
    has ended (a None amount is in effect for the next deadline). Open-ended
    histories never end. After exhaustion, `terminal` holds a zero-amount tick
    dated on the first unfunded deadline.

    Also an iterator, so itertools works on it directly.
    """

    def __init__(
        self,
        target_name: str,
        cadence: str,
        values: Sequence[Tuple[date, Optional[int]]],
    ):
        if not values:
            raise EmptyScheduleDefinition(target_name)

        self.target_name = target_name
        self.cadence = normalize_cadence(cadence)
        # Stable sort: among equal dates the later amendment wins the lookup
        self.values: Tuple[Tuple[date, Optional[int]], ...] = tuple(
            sorted(values, key=lambda entry: entry[0])
        )
        self._dates = [entry[0] for entry in self.values]
        self._ticks_per_deadline = TICKS_PER_DEADLINE[self.cadence]
        self._anchor = self.values[0][0]
        self._deadline_index = 0
        self._pending: deque[ScheduleTick] = deque()
        self.terminal: Optional[ScheduleTick] = None

    def amount_for(self, day: date) -> Optional[int]:
        """Value in effect on `day`: latest entry with effective date <= day."""
        idx = bisect_right(self._dates, day) - 1
        if idx < 0:
            return None
        return self.values[idx][1]

    def next_tick(self) -> Optional[ScheduleTick]:
        if self._pending:
            return self._pending.popleft()
        if self.terminal is not None:
            return None

        deadline = nth_deadline(self.cadence, self._anchor, self._deadline_index)
        amount = self.amount_for(deadline)
        if amount is None:
            self.terminal = ScheduleTick(target=self.target_name, date=deadline, amount=0)
            return None

        self._deadline_index += 1
        self._pending.extend(
            split_deadline(self.target_name, deadline, amount, self._ticks_per_deadline)
        )
        return self._pending.popleft()

    def restart(self) -> "SavingSchedule":
        """Fresh cursor over the same definition, positioned at the first tick."""
        return SavingSchedule(self.target_name, self.cadence, self.values)

    def __iter__(self) -> Iterator[ScheduleTick]:
        return self

    def __next__(self) -> ScheduleTick:
        tick = self.next_tick()
        if tick is None:
            raise StopIteration
        return tick


def weekly_saving_schedule(target_name: str, values) -> SavingSchedule:
    return SavingSchedule(target_name, CADENCE_WEEKLY, values)


def monthly_saving_schedule(target_name: str, values) -> SavingSchedule:
    return SavingSchedule(target_name, CADENCE_MONTHLY, values)


def yearly_saving_schedule(target_name: str, values) -> SavingSchedule:
    return SavingSchedule(target_name, CADENCE_YEARLY, values)


def accrued_through(schedule: SavingSchedule, as_of: date) -> int:
    """Sum of the schedule's ticks dated on or before `as_of`."""
    total = 0
    tick = schedule.next_tick()
    while tick is not None and tick.date <= as_of:
        total += tick.amount
        tick = schedule.next_tick()
    return total
