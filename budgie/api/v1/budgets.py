"""
Budget API endpoints - accrued budgets, runway and spending rates
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from budgie.api.deps import get_event_store
from budgie.application.rates import SpendingRateService
from budgie.application.runway import RunwayService
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.budget import BudgetProjection
from budgie.readmodels.projectors.ledger import LedgerProjection
from budgie.utils.money import format_money


router = APIRouter(prefix="/api/v1/budgets", tags=["budgets"])


# === Response models ===

class BudgetResponse(BaseModel):
    target_name: str
    cadence: str
    priority: int
    current_value: Optional[int]
    budget: int  # accrued minus spent, cents
    budget_display: str


class RunwayTargetResponse(BaseModel):
    target_name: str
    funded_through: Optional[date]


class RunwayResponse(BaseModel):
    as_of: date
    total_balance: int
    total_allocation: int
    total_allocation_display: str
    targets: list[RunwayTargetResponse]


class RunwayTrendPoint(BaseModel):
    date: date
    weeks: int


class RateResponse(BaseModel):
    monthly_rate: int
    monthly_rate_display: str


# === Endpoints ===

@router.get("/", response_model=list[BudgetResponse])
def list_budgets(
    as_of: Optional[date] = None,
    store: EventStore = Depends(get_event_store),
):
    """Accrued budget of every target (default: today)"""
    summaries = BudgetProjection(store).budget_summaries(as_of or date.today())
    return [
        BudgetResponse(
            target_name=s.name,
            cadence=s.cadence,
            priority=s.priority,
            current_value=s.current_value,
            budget=s.accrued,
            budget_display=format_money(s.accrued),
        )
        for s in summaries
    ]


@router.get("/runway", response_model=RunwayResponse)
def runway(
    as_of: Optional[date] = None,
    store: EventStore = Depends(get_event_store),
):
    """Date through which each target is backed by the current balance"""
    as_of = as_of or date.today()
    allocation = RunwayService(store).allocation(as_of)
    return RunwayResponse(
        as_of=as_of,
        total_balance=allocation.total_balance,
        total_allocation=allocation.total_allocation,
        total_allocation_display=format_money(allocation.total_allocation),
        targets=[
            RunwayTargetResponse(target_name=name, funded_through=funded_through)
            for name, funded_through in allocation.funded_through.items()
        ],
    )


@router.get("/runway/trend", response_model=list[RunwayTrendPoint])
def runway_trend(
    start: Optional[date] = None,
    end: Optional[date] = None,
    store: EventStore = Depends(get_event_store),
):
    """
    Shortest runway in weeks on each first of the month

    start defaults to the first transaction, end to today.
    """
    end = end or date.today()
    start = start or LedgerProjection(store).first_transaction_date() or end
    trend = RunwayService(store).runway_trend(start, end)
    return [RunwayTrendPoint(date=day, weeks=weeks) for day, weeks in trend.items()]


@router.get("/rate", response_model=RateResponse)
def projected_rate(
    as_of: Optional[date] = None,
    store: EventStore = Depends(get_event_store),
):
    """Average monthly accrual of all targets over the next year"""
    rate = SpendingRateService(store).projected_spending_rate(as_of or date.today())
    return RateResponse(monthly_rate=rate, monthly_rate_display=format_money(rate))


@router.get("/expense-rate", response_model=RateResponse)
def expense_rate(
    start: Optional[date] = None,
    end: Optional[date] = None,
    store: EventStore = Depends(get_event_store),
):
    """Average monthly spending against targets (start defaults to the first transaction)"""
    end = end or date.today()
    start = start or LedgerProjection(store).first_transaction_date() or end
    rate = SpendingRateService(store).historical_expense_rate(start, end)
    return RateResponse(monthly_rate=rate, monthly_rate_display=format_money(rate))
