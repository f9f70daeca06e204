"""
LedgerProjection - account balances and itemized transaction history

Handles events:
- CREATE_ACCOUNT: open the account at 0
- TRANSACT: add the sum of the itemized amounts to the account
- TRANSFER: move value from source to destination (unallocated)
"""
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from budgie.domain.errors import UnknownAccount
from budgie.domain.events import (
    EVENT_CREATE_ACCOUNT,
    EVENT_TRANSACT,
    EVENT_TRANSFER,
    UNALLOCATED,
    Event,
)
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.base import BaseProjection


@dataclass(frozen=True)
class TransactionEntry:
    """One line of an account's history, with the balance after it"""
    date: date
    itemized_amounts: Dict[str, int]
    memo: str
    balance: int

    @property
    def total(self) -> int:
        return sum(self.itemized_amounts.values())


class LedgerProjection(BaseProjection):

    def __init__(self, store: EventStore):
        super().__init__(store, projection_name="ledger")

    def balances(self, as_of: date) -> Dict[str, int]:
        """
        Balance of every account as of a date (inclusive)

        Raises:
            UnknownAccount: a transaction or transfer references an account
                that was not created before it in the log
        """
        def fold(result: Dict[str, int], event: Event) -> Dict[str, int]:
            if event.type == EVENT_CREATE_ACCOUNT:
                return {**result, event.account_name: 0}

            if event.type == EVENT_TRANSACT:
                _require_account(result, event.account_name)
                if event.date > as_of:
                    return result
                return {**result, event.account_name: result[event.account_name] + event.total}

            if event.type == EVENT_TRANSFER:
                _require_account(result, event.source_account)
                _require_account(result, event.destination_account)
                if event.date > as_of:
                    return result
                # Source first: a transfer to the same account nets to zero
                updated = {**result, event.source_account: result[event.source_account] - event.value}
                return {
                    **updated,
                    event.destination_account: updated[event.destination_account] + event.value,
                }

            return result

        return self.run(fold, {})

    def total_balance(self, as_of: date) -> int:
        """Sum of all account balances as of a date"""
        return sum(self.balances(as_of).values())

    def transactions(self, account_name: str) -> List[TransactionEntry]:
        """
        Account history in date order with running balances

        Transfers appear as unallocated entries with a "transfer to X" /
        "transfer from X" memo. Entries on the same date keep log order.

        Raises:
            UnknownAccount: the account was never created
        """
        def fold(result: Tuple[bool, tuple], event: Event) -> Tuple[bool, tuple]:
            created, entries = result

            if event.type == EVENT_CREATE_ACCOUNT and event.account_name == account_name:
                return True, entries

            if event.type == EVENT_TRANSACT and event.account_name == account_name:
                entry = (event.date, dict(event.itemized_amounts), event.memo)
                return created, entries + (entry,)

            if event.type == EVENT_TRANSFER:
                if event.source_account == account_name:
                    entry = (
                        event.date,
                        {UNALLOCATED: -event.value},
                        f"transfer to {event.destination_account}",
                    )
                    entries = entries + (entry,)
                if event.destination_account == account_name:
                    entry = (
                        event.date,
                        {UNALLOCATED: event.value},
                        f"transfer from {event.source_account}",
                    )
                    entries = entries + (entry,)
                return created, entries

            return result

        created, entries = self.run(fold, (False, ()))
        if not created:
            raise UnknownAccount(account_name)

        # sorted() is stable, so same-day entries keep their log order
        history: List[TransactionEntry] = []
        balance = 0
        for entry_date, amounts, memo in sorted(entries, key=lambda entry: entry[0]):
            balance += sum(amounts.values())
            history.append(TransactionEntry(
                date=entry_date,
                itemized_amounts=amounts,
                memo=memo,
                balance=balance,
            ))
        return history

    def account_names(self) -> List[str]:
        """Names of all created accounts, in creation order"""
        def fold(result: Tuple[str, ...], event: Event) -> Tuple[str, ...]:
            if event.type == EVENT_CREATE_ACCOUNT and event.account_name not in result:
                return result + (event.account_name,)
            return result

        return list(self.run(fold, ()))

    def first_transaction_date(self) -> Optional[date]:
        """Earliest business date of any transaction (None for an empty ledger)"""
        def fold(result: Optional[date], event: Event) -> Optional[date]:
            if event.type == EVENT_TRANSACT:
                if result is None or event.date < result:
                    return event.date
            return result

        return self.run(fold, None)


def _require_account(balances: Dict[str, int], account_name: str) -> None:
    if account_name not in balances:
        raise UnknownAccount(account_name)
