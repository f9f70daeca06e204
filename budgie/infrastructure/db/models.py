"""
SQLAlchemy ORM models
"""
from datetime import datetime
from sqlalchemy import JSON, String, Integer, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import JSONB

from budgie.infrastructure.db.session import Base


class EventLog(Base):
    """
    Event log - source of truth for Event Sourcing

    Every change is recorded as an immutable event. Rows are never updated;
    id defines the append order that projections fold over.
    """
    __tablename__ = "event_log"

    id: Mapped[int] = mapped_column(primary_key=True)

    event_type: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    # JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
    payload_json: Mapped[dict] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def to_record(self) -> dict:
        """Stored record in the flat {type, version, ...fields} shape"""
        return {**self.payload_json, "type": self.event_type, "version": self.version}
