"""Daily mood entries.

An entry captures seven 0-10 wellness scores plus optional notes, triggers,
activities and medications. Entries are immutable once logged.
"""
import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from mindtrack.shared.database import OwnedRepository, RecordStore
from mindtrack.shared.models import MoodEntry, operation
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import hash_pii, hash_text_for_audit
from mindtrack.shared.validation import validate_mood_entry

logger = logging.getLogger(__name__)

MOOD_ENTRY_TABLE = "mood_entries"
MOOD_ENTRY_FAMILY = "mood_entry"


class MoodEntryService:
    """Creates and reads mood entries under per-owner isolation."""

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.entries: OwnedRepository[MoodEntry] = OwnedRepository(
            store, guard, MOOD_ENTRY_TABLE, MOOD_ENTRY_FAMILY
        )
        self._clock = clock

    def get_entry_counter(self) -> int:
        return self.entries.counter()

    @operation("MOOD_ENTRY_LOG")
    def log_mood_entry(
        self,
        caller: str,
        mood_score: int,
        energy_level: int,
        stress_level: int,
        anxiety_level: int,
        sleep_quality: int,
        social_interaction: int,
        physical_activity: int,
        notes: str = "",
        triggers: Sequence[str] = (),
        activities: Sequence[str] = (),
        medications: Sequence[str] = (),
    ) -> int:
        """Log a mood entry for the caller.

        Returns:
            OperationResult with the new entry id, or INVALID_INPUT if any
            score is outside [0, 10] or a text/list field is too long
        """
        scores = {
            "mood_score": mood_score,
            "energy_level": energy_level,
            "stress_level": stress_level,
            "anxiety_level": anxiety_level,
            "sleep_quality": sleep_quality,
            "social_interaction": social_interaction,
            "physical_activity": physical_activity,
        }
        validate_mood_entry(scores, notes, triggers, activities, medications)

        created_at = self._clock()
        entry_id = self.entries.create(
            lambda new_id: (
                new_id,
                MoodEntry(
                    entry_id=new_id,
                    owner=caller,
                    notes=notes,
                    triggers=tuple(triggers),
                    activities=tuple(activities),
                    medications=tuple(medications),
                    created_at=created_at,
                    **scores,
                ),
            )
        )

        logger.info(
            "MOOD_ENTRY_LOGGED",
            extra={
                "entry_id": entry_id,
                "caller_hash": hash_pii(caller),
                "mood_score": mood_score,
                "notes_hash": hash_text_for_audit(notes) if notes else None,
            }
        )
        return entry_id

    def get_mood_entry(self, caller: str, entry_id: int) -> Optional[MoodEntry]:
        return self.entries.find_for(caller, entry_id)
