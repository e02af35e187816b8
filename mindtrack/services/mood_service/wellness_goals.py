"""Wellness goals with percentage progress and milestones.

Progress is a percentage (0-100) and can only be set through
update_goal_progress(). Milestones are thresholds in target units; a
milestone counts as reached once progress covers it.
"""
import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence

from mindtrack.shared.database import OwnedRepository, RecordStore
from mindtrack.shared.models import WellnessGoal, operation
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import hash_pii
from mindtrack.shared.validation import validate_goal_progress, validate_wellness_goal

logger = logging.getLogger(__name__)

WELLNESS_GOAL_TABLE = "wellness_goals"
WELLNESS_GOAL_FAMILY = "wellness_goal"


def count_milestones_reached(goal: WellnessGoal, progress: int) -> int:
    """Milestones at or below ``progress`` percent of the target value."""
    achieved_value = goal.target_value * progress / 100
    return sum(1 for milestone in goal.milestones if milestone <= achieved_value)


class WellnessGoalService:

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.goals: OwnedRepository[WellnessGoal] = OwnedRepository(
            store, guard, WELLNESS_GOAL_TABLE, WELLNESS_GOAL_FAMILY
        )
        self._clock = clock

    def get_goal_counter(self) -> int:
        return self.goals.counter()

    @operation("WELLNESS_GOAL_CREATE")
    def create_wellness_goal(
        self,
        caller: str,
        name: str,
        target_value: int,
        target_date: int,
        milestones: Sequence[int] = (),
    ) -> int:
        """Create a goal at 0% progress and return its id."""
        validate_wellness_goal(name, target_value, target_date, milestones)

        created_at = self._clock()
        goal_id = self.goals.create(
            lambda new_id: (
                new_id,
                WellnessGoal(
                    goal_id=new_id,
                    owner=caller,
                    name=name,
                    target_value=target_value,
                    target_date=target_date,
                    milestones=tuple(milestones),
                    created_at=created_at,
                ),
            )
        )

        logger.info(
            "WELLNESS_GOAL_CREATED",
            extra={
                "goal_id": goal_id,
                "caller_hash": hash_pii(caller),
                "milestone_count": len(milestones),
            }
        )
        return goal_id

    @operation("WELLNESS_GOAL_PROGRESS")
    def update_goal_progress(self, caller: str, goal_id: int, progress: int) -> int:
        """Set the goal's progress percentage.

        Returns:
            OperationResult with the stored percentage; NOT_FOUND if the goal
            is missing or owned by someone else; INVALID_INPUT outside 0-100
        """
        with self.goals.transaction():
            goal = self.goals.get_for(caller, goal_id)
            validate_goal_progress(progress)

            updated = self.goals.save(goal_id, replace(
                goal,
                current_progress=progress,
                milestones_reached=count_milestones_reached(goal, progress),
                achieved=progress == 100,
                updated_at=self._clock(),
            ))

        logger.info(
            "WELLNESS_GOAL_PROGRESS_UPDATED",
            extra={
                "goal_id": goal_id,
                "caller_hash": hash_pii(caller),
                "progress": progress,
                "milestones_reached": updated.milestones_reached,
                "achieved": updated.achieved,
            }
        )
        return updated.current_progress

    def get_wellness_goal(self, caller: str, goal_id: int) -> Optional[WellnessGoal]:
        return self.goals.find_for(caller, goal_id)
