"""
Transaction API endpoints - credits, debits and transfers
"""
from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from budgie.api.deps import get_event_store
from budgie.application.bookkeeping import (
    CreditAccountUseCase,
    DebitAccountUseCase,
    TransferFundsUseCase,
)
from budgie.infrastructure.eventlog.store import EventStore
from budgie.utils.validation import parse_amount, parse_cents


router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


# === Request/Response models ===

class TransactRequest(BaseModel):
    """
    Credit or debit

    amount is "12.50" (unallocated) or an itemization
    "groceries=12.50,_=3". Debit amounts are given positive.
    """
    account_name: str
    amount: dict[str, int]
    date: date
    memo: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        """Amount text to {target: cents}"""
        if isinstance(v, str):
            return parse_amount(v)
        return v


class TransferRequest(BaseModel):
    source_account: str
    destination_account: str
    value: int
    date: date

    @field_validator("value", mode="before")
    @classmethod
    def validate_value(cls, v):
        """Value text to cents"""
        if isinstance(v, str):
            return parse_cents(v)
        return v


class TransactResponse(BaseModel):
    account_name: str
    date: date
    itemized_amounts: dict[str, int]


# === Endpoints ===

@router.post("/credit", response_model=TransactResponse)
def credit(
    req: TransactRequest,
    store: EventStore = Depends(get_event_store),
):
    """Money into an account; itemized credits are refunds to targets"""
    CreditAccountUseCase(store).execute(req.account_name, req.amount, req.date, req.memo)
    return TransactResponse(
        account_name=req.account_name,
        date=req.date,
        itemized_amounts=req.amount,
    )


@router.post("/debit", response_model=TransactResponse)
def debit(
    req: TransactRequest,
    store: EventStore = Depends(get_event_store),
):
    """Money out of an account; itemized debits are spending against targets"""
    DebitAccountUseCase(store).execute(req.account_name, req.amount, req.date, req.memo)
    return TransactResponse(
        account_name=req.account_name,
        date=req.date,
        itemized_amounts={key: -value for key, value in req.amount.items()},
    )


@router.post("/transfer", response_model=TransferRequest)
def transfer(
    req: TransferRequest,
    store: EventStore = Depends(get_event_store),
):
    """Move unallocated money between accounts"""
    TransferFundsUseCase(store).execute(
        req.source_account,
        req.destination_account,
        req.value,
        req.date,
    )
    return req
