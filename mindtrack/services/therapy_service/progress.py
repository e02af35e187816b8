"""Per-owner progress tracking.

The progress record is created lazily by the first operation that needs it.
It counts completed sessions and their mood change, daily check-ins with a
consecutive-day streak, and the set of coping strategies learned.
"""
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from mindtrack.shared.database import OwnedRepository, RecordStore
from mindtrack.shared.models import (
    InvalidInputError,
    ProgressTracking,
    SessionStatistics,
    operation,
)
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import hash_pii
from mindtrack.shared.validation import LIMITS, validate_coping_strategy

logger = logging.getLogger(__name__)

PROGRESS_TABLE = "progress_tracking"


def advance_streak(progress: ProgressTracking, today: date) -> ProgressTracking:
    """Apply one check-in on ``today`` to the streak counters."""
    if progress.last_check_in == today:
        streak = progress.current_streak
    elif progress.last_check_in == today - timedelta(days=1):
        streak = progress.current_streak + 1
    else:
        streak = 1

    return replace(
        progress,
        check_ins=progress.check_ins + 1,
        current_streak=streak,
        longest_streak=max(progress.longest_streak, streak),
        last_check_in=today,
    )


class ProgressService:

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.progress: OwnedRepository[ProgressTracking] = OwnedRepository(
            store, guard, PROGRESS_TABLE
        )
        self._clock = clock

    def _load_or_new(self, caller: str) -> ProgressTracking:
        existing = self.progress.find_for(caller, caller)
        if existing is not None:
            return existing
        logger.info("PROGRESS_TRACKING_CREATED", extra={"caller_hash": hash_pii(caller)})
        return ProgressTracking(owner=caller, updated_at=self._clock())

    def _save(self, record: ProgressTracking) -> ProgressTracking:
        return self.progress.save(record.owner, replace(record, updated_at=self._clock()))

    def record_completed_session(self, caller: str, mood_change: int) -> ProgressTracking:
        """Count a closed therapy session. Called by the session service."""
        with self.progress.transaction():
            current = self._load_or_new(caller)
            return self._save(replace(
                current,
                sessions_completed=current.sessions_completed + 1,
                total_mood_improvement=current.total_mood_improvement + mood_change,
            ))

    @operation("PROGRESS_TRACKING_UPDATE")
    def update_progress_tracking(self, caller: str) -> bool:
        """Record a daily check-in, creating the progress record if needed."""
        with self.progress.transaction():
            updated = self._save(advance_streak(self._load_or_new(caller), self._clock().date()))

        logger.info(
            "PROGRESS_TRACKING_UPDATED",
            extra={
                "caller_hash": hash_pii(caller),
                "check_ins": updated.check_ins,
                "current_streak": updated.current_streak,
            }
        )
        return True

    @operation("COPING_STRATEGY_LEARN")
    def learn_coping_strategy(self, caller: str, strategy: str) -> bool:
        """Add a coping strategy to the caller's set. Re-learning is a no-op."""
        validate_coping_strategy(strategy)

        with self.progress.transaction():
            current = self._load_or_new(caller)
            if strategy in current.coping_strategies:
                self._save(current)
                return True
            if len(current.coping_strategies) >= LIMITS.STRATEGIES_MAX_ITEMS:
                raise InvalidInputError(
                    f"At most {LIMITS.STRATEGIES_MAX_ITEMS} coping strategies", field="strategy"
                )

            updated = self._save(
                replace(current, coping_strategies=current.coping_strategies + (strategy,))
            )

        logger.info(
            "COPING_STRATEGY_LEARNED",
            extra={
                "caller_hash": hash_pii(caller),
                "strategy_count": len(updated.coping_strategies),
            }
        )
        return True

    def get_progress_tracking(self, caller: str) -> Optional[ProgressTracking]:
        return self.progress.find_for(caller, caller)

    def get_session_statistics(self, caller: str) -> Optional[SessionStatistics]:
        progress = self.get_progress_tracking(caller)
        if progress is None:
            return None

        average = 0.0
        if progress.sessions_completed:
            average = progress.total_mood_improvement / progress.sessions_completed

        return SessionStatistics(
            sessions_completed=progress.sessions_completed,
            coping_strategies_learned=len(progress.coping_strategies),
            check_ins=progress.check_ins,
            current_streak=progress.current_streak,
            longest_streak=progress.longest_streak,
            average_mood_improvement=average,
        )
