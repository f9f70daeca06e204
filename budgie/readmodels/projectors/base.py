"""
Base Projection - shared plumbing for read-side projections

Projections build read models by folding the event log. They keep no state
between queries: every query replays the log, so an appended (or backdated)
event is reflected immediately and there is no checkpoint to invalidate.

Fold functions never mutate their accumulator; they return updated copies.
"""
import logging
from typing import Callable, TypeVar

from budgie.domain.events import Event
from budgie.infrastructure.eventlog.store import EventStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseProjection:
    """
    Base class for all projections

    Subclasses expose query methods; each query folds the log with a
    handler that dispatches on event.type and ignores unrelated events.
    """

    def __init__(self, store: EventStore, projection_name: str):
        """
        Args:
            store: Event store to replay
            projection_name: Name used in log messages
        """
        self.store = store
        self.projection_name = projection_name

    def run(self, fold: Callable[[T, Event], T], initial_value: T) -> T:
        """
        Replay the whole log through `fold`

        Raises:
            StoreUnavailable: the store could not be read
        """
        logger.debug("Replaying event log for %s projection", self.projection_name)
        return self.store.project(fold, initial_value)
