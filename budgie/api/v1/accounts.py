"""
Account API endpoints
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from budgie.api.deps import get_event_store
from budgie.application.bookkeeping import CreateAccountUseCase
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.ledger import LedgerProjection
from budgie.utils.money import format_money


router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


# === Request/Response models ===

class CreateAccountRequest(BaseModel):
    account_name: str

    @field_validator("account_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Account name must not be empty")
        return v


class AccountResponse(BaseModel):
    account_name: str


class AccountBalanceResponse(BaseModel):
    account_name: str
    balance: int  # cents
    balance_display: str


class BalancesResponse(BaseModel):
    as_of: date
    accounts: list[AccountBalanceResponse]
    total: int
    total_display: str


class TransactionEntryResponse(BaseModel):
    date: date
    itemized_amounts: dict[str, int]
    memo: str
    amount: int
    amount_display: str
    balance: int
    balance_display: str


# === Endpoints ===

@router.post("/", response_model=AccountResponse)
def create_account(
    req: CreateAccountRequest,
    store: EventStore = Depends(get_event_store),
):
    """Open a new account with a zero balance"""
    CreateAccountUseCase(store).execute(req.account_name)
    return AccountResponse(account_name=req.account_name)


@router.get("/balances", response_model=BalancesResponse)
def account_balances(
    as_of: Optional[date] = None,
    store: EventStore = Depends(get_event_store),
):
    """Balance of every account (default: today)"""
    as_of = as_of or date.today()
    balances = LedgerProjection(store).balances(as_of)
    total = sum(balances.values())

    return BalancesResponse(
        as_of=as_of,
        accounts=[
            AccountBalanceResponse(
                account_name=name,
                balance=balance,
                balance_display=format_money(balance),
            )
            for name, balance in balances.items()
        ],
        total=total,
        total_display=format_money(total),
    )


@router.get("/{account_name}/transactions", response_model=list[TransactionEntryResponse])
def account_transactions(
    account_name: str,
    store: EventStore = Depends(get_event_store),
):
    """Itemized history of one account with running balances"""
    entries = LedgerProjection(store).transactions(account_name)

    return [
        TransactionEntryResponse(
            date=entry.date,
            itemized_amounts=entry.itemized_amounts,
            memo=entry.memo,
            amount=entry.total,
            amount_display=format_money(entry.total),
            balance=entry.balance,
            balance_display=format_money(entry.balance),
        )
        for entry in entries
    ]
