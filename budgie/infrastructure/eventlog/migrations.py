"""
Event schema migrations

Stored records keep the version they were written with. On replay every
record is upgraded step by step until no migration is registered for its
(type, version) pair, so projections only ever see current versions.
"""
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from budgie.domain.errors import MigrationLoopError
from budgie.domain.events import EVENT_CREATE_TARGET, EVENT_TRANSACT, EVENT_TRANSFER, UNALLOCATED

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Migration = Callable[[Record], Record]


class MigrationRegistry:
    """
    Versioned upgrade functions keyed by (event type, version)

    Each migration takes a record and returns a new record with a different
    version. upgrade() refuses to visit the same (type, version) twice.
    """

    def __init__(
        self,
        migrations: Optional[Dict[Tuple[str, int], Migration]] = None,
        max_steps: int = 32,
    ):
        self._migrations: Dict[Tuple[str, int], Migration] = dict(migrations or {})
        self.max_steps = max_steps

    def register(self, event_type: str, version: int):
        """Decorator: register a migration from (event_type, version)"""
        def decorator(fn: Migration) -> Migration:
            self._migrations[(event_type, version)] = fn
            return fn
        return decorator

    def __contains__(self, key: Tuple[str, int]) -> bool:
        return key in self._migrations

    def upgrade(self, record: Record) -> Record:
        """
        Upgrade a stored record to the latest known version

        Raises:
            MigrationLoopError: a (type, version) pair repeats or the chain
                is longer than max_steps
        """
        seen = set()
        key = (record.get("type"), record.get("version"))
        while key in self:
            if key in seen or len(seen) >= self.max_steps:
                raise MigrationLoopError(f"Migration chain does not settle at {key[0]}__{key[1]}")
            seen.add(key)
            record = self._migrations[key](dict(record))
            logger.debug("Migrated %s__%s to version %s", key[0], key[1], record.get("version"))
            key = (record.get("type"), record.get("version"))
        return record


DEFAULT_MIGRATIONS = MigrationRegistry()


@DEFAULT_MIGRATIONS.register(EVENT_TRANSACT, 1)
def transact_v1_to_v2(record: Record) -> Record:
    """v1 carried a single value and an optional target; v2 itemizes."""
    target = record.pop("target", None) or UNALLOCATED
    value = record.pop("value")
    record["itemizedAmounts"] = {target: value}
    record["memo"] = record.get("memo") or ""
    record["version"] = 2
    return record


@DEFAULT_MIGRATIONS.register(EVENT_CREATE_TARGET, 1)
def create_target_v1_to_v2(record: Record) -> Record:
    """v1 named a funding account (allocateFrom) that was never used."""
    record.pop("allocateFrom", None)
    record["version"] = 2
    return record


# v1 transfers carried no business date and applied to every balance query.
# The earliest representable date keeps them in effect for any as_of.
UNDATED_TRANSFER_DATE = "0001-01-01"


@DEFAULT_MIGRATIONS.register(EVENT_TRANSFER, 1)
def transfer_v1_to_v2(record: Record) -> Record:
    """v1 had no date; v2 requires one."""
    if not record.get("date"):
        record["date"] = UNDATED_TRANSFER_DATE
    record["version"] = 2
    return record
