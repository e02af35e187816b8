"""Mood Service: daily mood logging, insights, goals and safety plans.

Every record is owned by the principal that created it. Reads of another
participant's record return None, exactly as for a record that does not
exist.

Components:
- mood_entries.py: MoodEntryService (seven 0-10 wellness scores per entry)
- insights.py: MoodInsightService (averages, trend, recommendation)
- wellness_goals.py: WellnessGoalService (percentage progress, milestones)
- crisis_plans.py: CrisisPlanService (one safety plan per owner)
"""

from .mood_entries import MoodEntryService
from .insights import MoodInsightService
from .wellness_goals import WellnessGoalService
from .crisis_plans import CrisisPlanService

__all__ = [
    "MoodEntryService",
    "MoodInsightService",
    "WellnessGoalService",
    "CrisisPlanService",
]
