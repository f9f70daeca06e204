"""
Event Log Repository - SQL-backed event store

Events are appended as rows of the event_log table; the primary key defines
append order. Reads go in id-ordered batches so the whole log is never held
as ORM objects at once.
"""
import logging
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from budgie.domain.errors import StoreUnavailable
from budgie.infrastructure.db.models import EventLog
from budgie.infrastructure.eventlog.migrations import MigrationRegistry
from budgie.infrastructure.eventlog.store import EventStore

logger = logging.getLogger(__name__)


class SqlEventStore(EventStore):
    """
    Event store on top of the event_log table

    Each append is committed on its own: the log is single-writer and an
    appended event must be visible to the next projection.
    """

    def __init__(
        self,
        db: Session,
        batch_size: int = 200,
        migrations: Optional[MigrationRegistry] = None,
    ):
        super().__init__(migrations)
        self.db = db
        self.batch_size = batch_size

    def append_record(self, record: Dict[str, Any]) -> None:
        payload = {k: v for k, v in record.items() if k not in ("type", "version")}
        row = EventLog(
            event_type=record["type"],
            version=record["version"],
            payload_json=payload,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to append %s event: %s", record["type"], e)
            raise StoreUnavailable(f"Could not append {record['type']} event") from e

    def list_events_since(self, after_id: int = 0, limit: int = 200) -> List[EventLog]:
        """
        Rows with id > after_id, oldest first

        Args:
            after_id: checkpoint - id of the last row already read
            limit: maximum rows in one batch

        Raises:
            StoreUnavailable: query failed
        """
        try:
            return (
                self.db.query(EventLog)
                .filter(EventLog.id > after_id)
                .order_by(EventLog.id.asc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable("Could not read the event log") from e

    def iter_records(self) -> Iterator[Dict[str, Any]]:
        checkpoint = 0
        while True:
            rows = self.list_events_since(after_id=checkpoint, limit=self.batch_size)
            if not rows:
                break

            for row in rows:
                yield row.to_record()
                checkpoint = row.id

            # Short batch - reached the end of the log
            if len(rows) < self.batch_size:
                break
