"""
Pytest fixtures for testing
"""
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from budgie.infrastructure.db.session import Base
from budgie.infrastructure.db import models  # noqa: F401
from budgie.infrastructure.eventlog.store import InMemoryEventStore


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with the event_log table (JSONB falls back to JSON)"""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def store():
    """Empty in-memory event store"""
    return InMemoryEventStore()


@pytest.fixture
def start_date():
    """Sunday 1 Nov 2020 - day 0 of most scenarios"""
    return date(2020, 11, 1)
