"""
Tests for domain event records
"""
from datetime import date

import pytest

from budgie.domain.errors import UnknownEventType
from budgie.domain.events import (
    CreateAccount,
    CreateTarget,
    Transact,
    Transfer,
    decode_event,
)


def test_transact_record_uses_camel_case_fields():
    event = Transact(
        account_name="checking",
        date=date(2020, 11, 1),
        itemized_amounts={"_": 300, "groceries": -200},
        memo="market",
    )

    assert event.to_record() == {
        "type": "TRANSACT",
        "version": 2,
        "accountName": "checking",
        "date": "2020-11-01",
        "itemizedAmounts": {"_": 300, "groceries": -200},
        "memo": "market",
    }
    assert event.total == 100


def test_decode_event_builds_typed_events():
    records = [
        CreateAccount(account_name="checking").to_record(),
        Transfer(
            source_account="checking",
            destination_account="savings",
            value=500,
            date=date(2020, 11, 2),
        ).to_record(),
    ]

    events = [decode_event(record) for record in records]

    assert events[0] == CreateAccount(account_name="checking")
    assert isinstance(events[1], Transfer)
    assert events[1].date == date(2020, 11, 2)
    assert events[1].value == 500


def test_create_target_keeps_null_value():
    """A null target value (retired target) survives a round trip"""
    event = CreateTarget(
        start_date=date(2021, 1, 1),
        target_name="rent",
        target_value=None,
        cadence="MONTHLY",
        priority=1,
    )

    assert decode_event(event.to_record()) == event


def test_transact_memo_defaults_to_empty_string():
    record = {
        "type": "TRANSACT",
        "version": 2,
        "accountName": "checking",
        "date": "2020-11-01",
        "itemizedAmounts": {"_": 100},
        "memo": None,
    }

    assert decode_event(record).memo == ""


def test_decode_unknown_type_raises():
    with pytest.raises(UnknownEventType) as exc_info:
        decode_event({"type": "CLOSE_ACCOUNT", "version": 1, "accountName": "checking"})

    assert exc_info.value.event_type == "CLOSE_ACCOUNT"


def test_decode_outdated_version_raises():
    """Records must be migrated before decoding"""
    with pytest.raises(UnknownEventType):
        decode_event({
            "type": "TRANSACT",
            "version": 1,
            "accountName": "checking",
            "date": "2020-11-01",
            "value": 100,
        })


def test_decode_malformed_record_raises():
    """Missing or unparsable fields never escape as KeyError/ValueError"""
    with pytest.raises(UnknownEventType):
        decode_event({"type": "TRANSFER", "version": 2, "sourceAccount": "a", "value": 1})

    with pytest.raises(UnknownEventType):
        decode_event({
            "type": "CREATE_TARGET",
            "version": 2,
            "startDate": "not-a-date",
            "targetName": "rent",
            "targetValue": 800,
            "cadence": "MONTHLY",
            "priority": 1,
        })
