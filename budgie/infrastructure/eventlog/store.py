"""
Event store interface - append-only ordered log of domain events

Projections depend on this interface only. project() folds in append order;
the log never reorders events by their business date.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, TypeVar

from budgie.domain.events import Event, decode_event
from budgie.infrastructure.eventlog.migrations import DEFAULT_MIGRATIONS, MigrationRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EventStore(ABC):
    """
    Base class for event store backends

    Backends implement append_record() and iter_records(); migration and
    decoding happen here, once, for all of them.
    """

    def __init__(self, migrations: Optional[MigrationRegistry] = None):
        self.migrations = migrations if migrations is not None else DEFAULT_MIGRATIONS

    @abstractmethod
    def append_record(self, record: Dict[str, Any]) -> None:
        """Persist one record at the end of the log"""
        pass

    @abstractmethod
    def iter_records(self) -> Iterable[Dict[str, Any]]:
        """Stored records in append order, as written"""
        pass

    def append(self, event: Event) -> None:
        """
        Append an event to the log

        Raises:
            StoreUnavailable: backend failed to persist the event
        """
        self.append_record(event.to_record())
        logger.info("Appended %s event", event.type)

    def project(self, fold: Callable[[T, Event], T], initial_value: T) -> T:
        """
        Fold every event, oldest first, into a result

        Records are upgraded to their latest version before decoding.

        Raises:
            StoreUnavailable: backend failed to read the log
            UnknownEventType: a record cannot be decoded
        """
        result = initial_value
        for event in self._decoded():
            result = fold(result, event)
        return result

    def events(self) -> List[Event]:
        """Snapshot of the whole log as typed events"""
        return list(self._decoded())

    def _decoded(self) -> Iterator[Event]:
        for record in self.iter_records():
            yield decode_event(self.migrations.upgrade(record))


class InMemoryEventStore(EventStore):
    """Event store kept in a Python list (tests, embedding)"""

    def __init__(self, migrations: Optional[MigrationRegistry] = None):
        super().__init__(migrations)
        self.records: List[Dict[str, Any]] = []

    def append_record(self, record: Dict[str, Any]) -> None:
        self.records.append(dict(record))

    def iter_records(self) -> Iterable[Dict[str, Any]]:
        return [dict(record) for record in self.records]
