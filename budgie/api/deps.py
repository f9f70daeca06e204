"""
FastAPI dependencies (event store)
"""
from typing import Iterator, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from budgie.config import (
    EVENT_STORE_JSONL,
    EVENT_STORE_MEMORY,
    EVENT_STORE_SQL,
    Settings,
    get_settings,
)
from budgie.infrastructure.db.session import get_session_factory
from budgie.infrastructure.eventlog.jsonl import JsonlEventStore
from budgie.infrastructure.eventlog.repository import SqlEventStore
from budgie.infrastructure.eventlog.store import EventStore, InMemoryEventStore


# Process-wide log for the "memory" backend
_memory_store: Optional[InMemoryEventStore] = None


def build_event_store(settings: Settings, db: Optional[Session] = None) -> EventStore:
    """
    Event store for the configured backend

    Raises:
        ValueError: unknown EVENT_STORE_BACKEND, or sql backend without a session
    """
    global _memory_store
    backend = settings.EVENT_STORE_BACKEND

    if backend == EVENT_STORE_SQL:
        if db is None:
            raise ValueError("sql event store needs a database session")
        return SqlEventStore(db, batch_size=settings.PROJECTION_BATCH_SIZE)
    if backend == EVENT_STORE_JSONL:
        return JsonlEventStore(settings.EVENT_LOG_PATH)
    if backend == EVENT_STORE_MEMORY:
        if _memory_store is None:
            _memory_store = InMemoryEventStore()
        return _memory_store
    raise ValueError(f"Unknown EVENT_STORE_BACKEND: {backend}")


def get_event_store(settings: Settings = Depends(get_settings)) -> Iterator[EventStore]:
    """
    Dependency: event store for one request

    Opens a database session only for the sql backend.

    Usage:
        @router.get("/balances")
        def balances(store: EventStore = Depends(get_event_store)):
            ...
    """
    if settings.EVENT_STORE_BACKEND != EVENT_STORE_SQL:
        yield build_event_store(settings)
        return

    db = get_session_factory()()
    try:
        yield build_event_store(settings, db)
    finally:
        db.close()
