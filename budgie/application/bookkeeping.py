"""
Bookkeeping use cases - validate input and append ledger events
"""
import logging
from datetime import date
from typing import Dict, Union

from budgie.domain.errors import DuplicateAccount, EmptyTransaction, InvalidAmount, UnknownAccount
from budgie.domain.events import UNALLOCATED, CreateAccount, Transact, Transfer
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.ledger import LedgerProjection

logger = logging.getLogger(__name__)

Amount = Union[int, Dict[str, int]]


def itemize(account_name: str, amount: Amount) -> Dict[str, int]:
    """
    Normalize an amount to an itemization map

    A plain integer is unallocated money; a mapping is copied as is.

    Raises:
        EmptyTransaction: the mapping has no entries
        InvalidAmount: an amount is not an integer (bools included)
    """
    if isinstance(amount, bool):
        raise InvalidAmount(account_name, amount)
    if isinstance(amount, int):
        return {UNALLOCATED: amount}
    itemized = {str(key): _cents(account_name, value) for key, value in amount.items()}
    if not itemized:
        raise EmptyTransaction(account_name)
    return itemized


def _cents(account_name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(account_name, value)
    return value


def _require_accounts(store: EventStore, *account_names: str) -> None:
    known = set(LedgerProjection(store).account_names())
    for account_name in account_names:
        if account_name not in known:
            raise UnknownAccount(account_name)


class CreateAccountUseCase:
    """Use case: open a new account"""

    def __init__(self, store: EventStore):
        self.store = store

    def execute(self, account_name: str) -> None:
        """
        Raises:
            DuplicateAccount: an account with this name already exists
        """
        if account_name in LedgerProjection(self.store).account_names():
            raise DuplicateAccount(account_name)
        self.store.append(CreateAccount(account_name=account_name))


class CreditAccountUseCase:
    """
    Use case: record money coming into an account

    Itemized credits against a target are refunds and grow that target's budget.
    """
    sign = 1

    def __init__(self, store: EventStore):
        self.store = store

    def execute(self, account_name: str, amount: Amount, on: date, memo: str = "") -> None:
        """
        Args:
            account_name: Account to post to
            amount: Cents (unallocated) or {target: cents}
            on: Business date of the transaction
            memo: Free-form note

        Raises:
            EmptyTransaction: itemization map is empty
            UnknownAccount: the account was never created
        """
        itemized = itemize(account_name, amount)
        _require_accounts(self.store, account_name)
        event = Transact(
            account_name=account_name,
            date=on,
            itemized_amounts={key: self.sign * value for key, value in itemized.items()},
            memo=memo or "",
        )
        self.store.append(event)
        logger.debug("Posted %s on %s to %s", event.total, on, account_name)


class DebitAccountUseCase(CreditAccountUseCase):
    """Use case: record money leaving an account (amounts are given positive)"""
    sign = -1


class TransferFundsUseCase:
    """Use case: move unallocated money between accounts"""

    def __init__(self, store: EventStore):
        self.store = store

    def execute(self, source_account: str, destination_account: str, value: int, on: date) -> None:
        """
        Raises:
            UnknownAccount: either account was never created
            InvalidAmount: value is not an integer
        """
        value = _cents(source_account, value)
        _require_accounts(self.store, source_account, destination_account)
        self.store.append(Transfer(
            source_account=source_account,
            destination_account=destination_account,
            value=value,
            date=on,
        ))
