"""Mood insights - aggregation over a participant's own entries.

An insight summarizes a chosen set of mood entries: per-dimension averages,
a 0-100 wellness score, the mood trend between the older and newer half of
the entries, and one rule-based recommendation.
"""
import logging
from datetime import datetime
from statistics import mean
from typing import Callable, List, Optional, Sequence

from mindtrack.shared.database import OwnedRepository, RecordStore
from mindtrack.shared.models import (
    MoodEntry,
    MoodInsight,
    MoodTrend,
    NotFoundError,
    operation,
)
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import hash_pii
from mindtrack.shared.validation import validate_insight_request
from .mood_entries import MoodEntryService

logger = logging.getLogger(__name__)

MOOD_INSIGHT_TABLE = "mood_insights"
MOOD_INSIGHT_FAMILY = "mood_insight"

# Mean mood change between halves that counts as a trend
TREND_DELTA = 1.0

HIGH_STRAIN_LEVEL = 7.0
POOR_SLEEP_LEVEL = 4.0
LOW_ACTIVITY_LEVEL = 3.0


def wellness_score(entries: Sequence[MoodEntry]) -> int:
    """Average of all seven dimensions on a 0-100 scale.

    Stress and anxiety count inverted, so higher is always better.
    """
    per_entry = [
        mean([
            e.mood_score,
            e.energy_level,
            e.sleep_quality,
            e.social_interaction,
            e.physical_activity,
            10 - e.stress_level,
            10 - e.anxiety_level,
        ])
        for e in entries
    ]
    return round(mean(per_entry) * 10)


def mood_trend(entries: Sequence[MoodEntry]) -> MoodTrend:
    """Compare mean mood of the older half against the newer half."""
    if len(entries) < 2:
        return MoodTrend.STABLE

    half = len(entries) // 2
    older = mean(e.mood_score for e in entries[:half])
    newer = mean(e.mood_score for e in entries[half:])

    if newer - older >= TREND_DELTA:
        return MoodTrend.IMPROVING
    if older - newer >= TREND_DELTA:
        return MoodTrend.DECLINING
    return MoodTrend.STABLE


def recommend(entries: Sequence[MoodEntry], trend: MoodTrend) -> str:
    stress = mean(e.stress_level for e in entries)
    anxiety = mean(e.anxiety_level for e in entries)
    sleep = mean(e.sleep_quality for e in entries)
    activity = mean(e.physical_activity for e in entries)

    if stress >= HIGH_STRAIN_LEVEL or anxiety >= HIGH_STRAIN_LEVEL:
        return "Practice a daily relaxation technique such as deep breathing."
    if sleep <= POOR_SLEEP_LEVEL:
        return "Prioritize a consistent sleep schedule."
    if trend is MoodTrend.DECLINING:
        return "Consider scheduling a therapy session to talk through recent changes."
    if activity <= LOW_ACTIVITY_LEVEL:
        return "Add light physical activity to your routine."
    return "Keep up your current routines."


class MoodInsightService:
    """Generates and reads mood insights."""

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        mood_entries: MoodEntryService,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.insights: OwnedRepository[MoodInsight] = OwnedRepository(
            store, guard, MOOD_INSIGHT_TABLE, MOOD_INSIGHT_FAMILY
        )
        self.mood_entries = mood_entries
        self._clock = clock

    def get_insight_counter(self) -> int:
        return self.insights.counter()

    @operation("MOOD_INSIGHT_GENERATE")
    def generate_mood_insight(self, caller: str, entry_ids: Sequence[int]) -> int:
        """Summarize the given entries into a new insight.

        Returns:
            OperationResult with the insight id; NOT_FOUND if any entry is
            missing or belongs to someone else
        """
        validate_insight_request(entry_ids)

        entries: List[MoodEntry] = []
        for entry_id in entry_ids:
            entry = self.mood_entries.get_mood_entry(caller, entry_id)
            if entry is None:
                raise NotFoundError(f"Mood entry {entry_id} not found", field="entry_ids")
            entries.append(entry)
        entries.sort(key=lambda e: e.entry_id)

        trend = mood_trend(entries)
        created_at = self._clock()
        insight_id = self.insights.create(
            lambda new_id: (
                new_id,
                MoodInsight(
                    insight_id=new_id,
                    owner=caller,
                    entry_ids=tuple(e.entry_id for e in entries),
                    average_mood=mean(e.mood_score for e in entries),
                    average_energy=mean(e.energy_level for e in entries),
                    average_stress=mean(e.stress_level for e in entries),
                    average_anxiety=mean(e.anxiety_level for e in entries),
                    average_sleep=mean(e.sleep_quality for e in entries),
                    wellness_score=wellness_score(entries),
                    trend=trend,
                    recommendation=recommend(entries, trend),
                    created_at=created_at,
                ),
            )
        )

        logger.info(
            "MOOD_INSIGHT_GENERATED",
            extra={
                "insight_id": insight_id,
                "caller_hash": hash_pii(caller),
                "entry_count": len(entries),
                "trend": trend.value,
            }
        )
        return insight_id

    def get_mood_insight(self, caller: str, insight_id: int) -> Optional[MoodInsight]:
        return self.insights.find_for(caller, insight_id)
