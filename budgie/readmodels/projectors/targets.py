"""
TargetRegistryProjection - saving targets and their value histories

Handles events:
- CREATE_TARGET: the first event for a name creates the target and fixes its
  cadence; later events append to its value history and update priority
"""
import logging
from typing import Dict

from budgie.domain.events import EVENT_CREATE_TARGET, Event
from budgie.domain.target import Target
from budgie.infrastructure.eventlog.store import EventStore
from budgie.readmodels.projectors.base import BaseProjection

logger = logging.getLogger(__name__)


class TargetRegistryProjection(BaseProjection):

    def __init__(self, store: EventStore):
        super().__init__(store, projection_name="targets")

    def targets(self) -> Dict[str, Target]:
        """All targets keyed by name, in creation order"""
        def fold(result: Dict[str, Target], event: Event) -> Dict[str, Target]:
            if event.type != EVENT_CREATE_TARGET:
                return result

            existing = result.get(event.target_name)
            if existing is None:
                target = Target(
                    name=event.target_name,
                    cadence=event.cadence,
                    priority=event.priority,
                    values=((event.start_date, event.target_value),),
                )
                return {**result, event.target_name: target}

            if event.cadence != existing.cadence:
                logger.warning(
                    "Ignoring cadence change of target %s from %s to %s",
                    event.target_name, existing.cadence, event.cadence,
                )
            amended = existing.amended(event.start_date, event.target_value, event.priority)
            return {**result, event.target_name: amended}

        return self.run(fold, {})
