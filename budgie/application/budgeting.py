"""
Budgeting use cases - create, amend and retire saving targets
"""
import logging
from datetime import date
from typing import Optional

from budgie.config import get_settings
from budgie.domain.errors import InvalidPriority, UnknownTarget
from budgie.domain.events import CreateTarget
from budgie.domain.saving_schedule import normalize_cadence
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.targets import TargetRegistryProjection

logger = logging.getLogger(__name__)


class CreateTargetUseCase:
    """
    Use case: create a saving target, or amend an existing one

    Process:
    1. Validate cadence and priority
    2. Append CREATE_TARGET

    Creating a target that already exists appends a value-history entry
    effective from start_date.
    """

    def __init__(self, store: EventStore):
        self.store = store

    def execute(
        self,
        start_date: date,
        target_name: str,
        target_value: int,
        cadence: str,
        priority: Optional[int] = None,
    ) -> None:
        """
        Args:
            start_date: First deadline (or effective date of the amendment)
            target_name: Target name used in itemizations
            target_value: Cents to save per cadence period
            cadence: WEEKLY, MONTHLY or YEARLY (case-insensitive)
            priority: Positive integer, lower is funded first
                (default: DEFAULT_TARGET_PRIORITY)

        Raises:
            InvalidCadence: unknown cadence, nothing appended
            InvalidPriority: priority is not a positive integer
        """
        cadence = normalize_cadence(cadence)
        if priority is None:
            priority = get_settings().DEFAULT_TARGET_PRIORITY
        if isinstance(priority, bool) or not isinstance(priority, int) or priority < 1:
            raise InvalidPriority(priority)

        self.store.append(CreateTarget(
            start_date=start_date,
            target_name=target_name,
            target_value=target_value,
            cadence=cadence,
            priority=priority,
        ))


class RetireTargetUseCase:
    """Use case: stop a target's schedule from a date on"""

    def __init__(self, store: EventStore):
        self.store = store
        self.registry = TargetRegistryProjection(store)

    def execute(self, target_name: str, end_date: date) -> None:
        """
        Append a null-valued amendment; deadlines on or after end_date accrue nothing

        Raises:
            UnknownTarget: no target with this name
        """
        target = self.registry.targets().get(target_name)
        if target is None:
            raise UnknownTarget(target_name)

        self.store.append(CreateTarget(
            start_date=end_date,
            target_name=target_name,
            target_value=None,
            cadence=target.cadence,
            priority=target.priority,
        ))
        logger.info("Retired target %s from %s", target_name, end_date)
