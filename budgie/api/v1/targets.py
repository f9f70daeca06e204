"""
Saving target API endpoints
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from budgie.api.deps import get_event_store
from budgie.application.budgeting import CreateTargetUseCase, RetireTargetUseCase
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.targets import TargetRegistryProjection
from budgie.utils.money import format_money
from budgie.utils.validation import parse_cents


router = APIRouter(prefix="/api/v1/targets", tags=["targets"])


# === Request/Response models ===

class CreateTargetRequest(BaseModel):
    target_name: str
    target_value: int  # cents per cadence period
    cadence: str  # WEEKLY, MONTHLY, YEARLY
    start_date: date
    priority: Optional[int] = None  # lower is funded first

    @field_validator("target_value", mode="before")
    @classmethod
    def validate_value(cls, v):
        """Value text to cents"""
        if isinstance(v, str):
            return parse_cents(v)
        return v


class RetireTargetRequest(BaseModel):
    end_date: date


class ValueEntryResponse(BaseModel):
    effective_date: date
    amount: Optional[int]
    amount_display: Optional[str]


class TargetResponse(BaseModel):
    target_name: str
    cadence: str
    priority: int
    value: Optional[int]  # in effect on as_of
    value_display: Optional[str]
    values: list[ValueEntryResponse]


def _display(amount: Optional[int]) -> Optional[str]:
    return None if amount is None else format_money(amount)


# === Endpoints ===

@router.post("/", status_code=201)
def create_target(
    req: CreateTargetRequest,
    store: EventStore = Depends(get_event_store),
):
    """Create a target, or amend an existing one from start_date on"""
    CreateTargetUseCase(store).execute(
        start_date=req.start_date,
        target_name=req.target_name,
        target_value=req.target_value,
        cadence=req.cadence,
        priority=req.priority,
    )
    return {"target_name": req.target_name}


@router.post("/{target_name}/retire")
def retire_target(
    target_name: str,
    req: RetireTargetRequest,
    store: EventStore = Depends(get_event_store),
):
    """Stop accruing for a target from end_date on"""
    RetireTargetUseCase(store).execute(target_name, req.end_date)
    return {"target_name": target_name, "end_date": req.end_date}


@router.get("/", response_model=list[TargetResponse])
def list_targets(
    as_of: Optional[date] = None,
    store: EventStore = Depends(get_event_store),
):
    """All targets with their value history"""
    as_of = as_of or date.today()
    targets = TargetRegistryProjection(store).targets()

    result = []
    for target in targets.values():
        value = target.schedule().amount_for(as_of)
        result.append(TargetResponse(
            target_name=target.name,
            cadence=target.cadence,
            priority=target.priority,
            value=value,
            value_display=_display(value),
            values=[
                ValueEntryResponse(
                    effective_date=effective_date,
                    amount=amount,
                    amount_display=_display(amount),
                )
                for effective_date, amount in target.values
            ],
        ))
    return result
