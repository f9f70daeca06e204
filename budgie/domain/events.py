"""
Domain events - the single source of truth for every derived view

Events are immutable and persisted as flat records:
    {"type": "TRANSACT", "version": 2, "accountName": ..., ...}

Record field names are camelCase so logs written by earlier releases stay
readable. Older record versions are upgraded by
budgie.infrastructure.eventlog.migrations before they reach decode_event().
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, ClassVar, Dict, Optional, Union

from budgie.domain.errors import UnknownEventType

# Reserved itemization key for money not tied to any target
UNALLOCATED = "_"

EVENT_CREATE_ACCOUNT = "CREATE_ACCOUNT"
EVENT_TRANSACT = "TRANSACT"
EVENT_TRANSFER = "TRANSFER"
EVENT_CREATE_TARGET = "CREATE_TARGET"


def _parse_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


@dataclass(frozen=True)
class CreateAccount:
    """Open an account with a zero balance"""
    type: ClassVar[str] = EVENT_CREATE_ACCOUNT
    version: ClassVar[int] = 1

    account_name: str

    def to_record(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "version": self.version,
            "accountName": self.account_name,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CreateAccount":
        return cls(account_name=record["accountName"])


@dataclass(frozen=True)
class Transact:
    """
    Credit or debit an account

    itemized_amounts maps target names to signed deltas (positive = credit,
    negative = debit). The UNALLOCATED key holds money not tied to a target.
    """
    type: ClassVar[str] = EVENT_TRANSACT
    version: ClassVar[int] = 2

    account_name: str
    date: date
    itemized_amounts: Dict[str, int] = field(default_factory=dict)
    memo: str = ""

    @property
    def total(self) -> int:
        return sum(self.itemized_amounts.values())

    def to_record(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "version": self.version,
            "accountName": self.account_name,
            "date": self.date.isoformat(),
            "itemizedAmounts": dict(self.itemized_amounts),
            "memo": self.memo,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Transact":
        return cls(
            account_name=record["accountName"],
            date=_parse_date(record["date"]),
            itemized_amounts={k: int(v) for k, v in record["itemizedAmounts"].items()},
            memo=record.get("memo") or "",
        )


@dataclass(frozen=True)
class Transfer:
    """Move unallocated money between two accounts"""
    type: ClassVar[str] = EVENT_TRANSFER
    version: ClassVar[int] = 2

    source_account: str
    destination_account: str
    value: int
    date: date

    def to_record(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "version": self.version,
            "sourceAccount": self.source_account,
            "destinationAccount": self.destination_account,
            "value": self.value,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Transfer":
        return cls(
            source_account=record["sourceAccount"],
            destination_account=record["destinationAccount"],
            value=int(record["value"]),
            date=_parse_date(record["date"]),
        )


@dataclass(frozen=True)
class CreateTarget:
    """
    Create a saving target or amend its value history

    A later CreateTarget with the same target_name appends a new
    (start_date, target_value) entry to that target. target_value None ends
    the schedule from start_date on.
    """
    type: ClassVar[str] = EVENT_CREATE_TARGET
    version: ClassVar[int] = 2

    start_date: date
    target_name: str
    target_value: Optional[int]
    cadence: str
    priority: int

    def to_record(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "version": self.version,
            "startDate": self.start_date.isoformat(),
            "targetName": self.target_name,
            "targetValue": self.target_value,
            "cadence": self.cadence,
            "priority": self.priority,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CreateTarget":
        value = record.get("targetValue")
        return cls(
            start_date=_parse_date(record["startDate"]),
            target_name=record["targetName"],
            target_value=None if value is None else int(value),
            cadence=record["cadence"],
            priority=int(record["priority"]),
        )


Event = Union[CreateAccount, Transact, Transfer, CreateTarget]

EVENT_CLASSES = {
    cls.type: cls for cls in (CreateAccount, Transact, Transfer, CreateTarget)
}


def decode_event(record: Dict[str, Any]) -> Event:
    """
    Build a typed event from an upgraded record

    Raises:
        UnknownEventType: type is not known, version is not the current one,
            or a field is missing or malformed
    """
    event_type = record.get("type")
    cls = EVENT_CLASSES.get(event_type)
    if cls is None or record.get("version") != cls.version:
        raise UnknownEventType(event_type, record.get("version"))
    try:
        return cls.from_record(record)
    except (KeyError, TypeError, ValueError) as e:
        raise UnknownEventType(event_type, record.get("version")) from e
