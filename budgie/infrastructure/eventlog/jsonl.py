"""
Line-delimited JSON event store

One JSON object per line, appended in order. A missing file is an empty log.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from budgie.domain.errors import StoreUnavailable
from budgie.infrastructure.eventlog.migrations import MigrationRegistry
from budgie.infrastructure.eventlog.store import EventStore

logger = logging.getLogger(__name__)


class JsonlEventStore(EventStore):

    def __init__(self, path, migrations: Optional[MigrationRegistry] = None):
        super().__init__(migrations)
        self.path = Path(path)

    def append_record(self, record: Dict[str, Any]) -> None:
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(record) + "\n")
        except OSError as e:
            raise StoreUnavailable(f"Could not append to {self.path}") from e

    def iter_records(self) -> Iterator[Dict[str, Any]]:
        if not self.path.exists():
            logger.debug("Event log %s does not exist yet", self.path)
            return
        try:
            with self.path.open("r", encoding="utf-8") as f:
                for line_no, line in enumerate(f, start=1):
                    if not line.strip():
                        continue
                    try:
                        yield json.loads(line)
                    except json.JSONDecodeError as e:
                        raise StoreUnavailable(f"Corrupt record at {self.path}:{line_no}") from e
        except UnicodeDecodeError as e:
            raise StoreUnavailable(f"Corrupt record in {self.path}") from e
        except OSError as e:
            raise StoreUnavailable(f"Could not read {self.path}") from e
