"""
Priority-ordered merge of saving schedules

Each source schedule is already non-decreasing by date, so a k-way merge
with one buffered tick per source yields a globally ordered stream:
date ascending, then priority ascending (lower number = more important),
then source order.
"""
import heapq
from typing import Iterable, Iterator, List, Optional, Tuple

from budgie.domain.saving_schedule import SavingSchedule, ScheduleTick


class CombinedSavingSchedule:
    """
    Pull-based cursor over several prioritized schedules

    Only the source whose tick was just emitted is advanced, so infinite
    sources are consumed one tick at a time.
    """

    def __init__(self, prioritized_schedules: Iterable[Tuple[SavingSchedule, int]]):
        self._sources: List[Tuple[SavingSchedule, int]] = list(prioritized_schedules)
        self._heap: list = []
        for index, (schedule, priority) in enumerate(self._sources):
            self._refill(index, schedule, priority)

    def _refill(self, index: int, schedule: SavingSchedule, priority: int) -> None:
        tick = schedule.next_tick()
        if tick is not None:
            # index is unique, so ticks themselves are never compared
            heapq.heappush(self._heap, (tick.date, priority, index, tick))

    def next_tick(self) -> Optional[ScheduleTick]:
        if not self._heap:
            return None
        _, priority, index, tick = heapq.heappop(self._heap)
        self._refill(index, self._sources[index][0], priority)
        return tick

    def __iter__(self) -> Iterator[ScheduleTick]:
        return self

    def __next__(self) -> ScheduleTick:
        tick = self.next_tick()
        if tick is None:
            raise StopIteration
        return tick
