"""Record types persisted in the record store.

All records are immutable. Services produce an updated copy with
dataclasses.replace() and write it back, so a record handed to a caller can
never alias the stored one. Per-user records carry an ``owner`` field set
once at creation from the caller's principal.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple

from .risk import InterventionLevel, MoodTrend, RiskLabel, SessionStatus


@dataclass(frozen=True)
class MoodEntry:
    """Daily mood log. All seven scores are on a 0-10 scale."""
    entry_id: int
    owner: str
    mood_score: int
    energy_level: int
    stress_level: int
    anxiety_level: int
    sleep_quality: int
    social_interaction: int
    physical_activity: int
    notes: str = ""
    triggers: Tuple[str, ...] = ()
    activities: Tuple[str, ...] = ()
    medications: Tuple[str, ...] = ()
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class MoodInsight:
    """Summary computed over a set of the owner's mood entries."""
    insight_id: int
    owner: str
    entry_ids: Tuple[int, ...]
    average_mood: float
    average_energy: float
    average_stress: float
    average_anxiety: float
    average_sleep: float
    wellness_score: int         # 0-100
    trend: MoodTrend
    recommendation: str
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class WellnessGoal:
    goal_id: int
    owner: str
    name: str
    target_value: int
    target_date: int
    milestones: Tuple[int, ...] = ()
    current_progress: int = 0   # percentage, 0-100
    milestones_reached: int = 0
    achieved: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CrisisSupportPlan:
    """Safety plan. One per owner; the owner is also the store key."""
    owner: str
    emergency_contacts: Tuple[str, ...] = ()
    hotlines: Tuple[str, ...] = ()
    plan_text: str = ""
    support_network: Tuple[str, ...] = ()
    risk_level: RiskLabel = RiskLabel.LOW
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class TherapySession:
    session_id: int
    owner: str
    topic: str
    mood_before: int
    modality: str
    status: SessionStatus = SessionStatus.OPEN
    mood_after: Optional[int] = None
    topics_discussed: Tuple[str, ...] = ()
    progress_notes: str = ""
    homework: str = ""
    rating: Optional[int] = None
    started_at: datetime = field(default_factory=datetime.utcnow)
    ended_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status is SessionStatus.OPEN

    @property
    def mood_change(self) -> Optional[int]:
        if self.mood_after is None:
            return None
        return self.mood_after - self.mood_before


@dataclass(frozen=True)
class Conversation:
    """One exchange inside a therapy session."""
    conversation_id: int
    session_id: int
    owner: str
    user_input: str
    bot_response: str
    context: str
    technique: str
    sentiment: str
    intervention_level: InterventionLevel = InterventionLevel.NONE
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class Assessment:
    """Standardized questionnaire result (PHQ-9, GAD-7, ...)."""
    assessment_id: int
    owner: str
    instrument: str
    questions_answered: int
    total_questions: int
    raw_score: int
    normalized_score: float
    intervention_level: InterventionLevel
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class ProgressTracking:
    """Per-owner therapy progress. Created lazily on first update."""
    owner: str
    sessions_completed: int = 0
    total_mood_improvement: int = 0
    check_ins: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_check_in: Optional[date] = None
    coping_strategies: Tuple[str, ...] = ()
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class SessionStatistics:
    """Read model derived from ProgressTracking."""
    sessions_completed: int
    coping_strategies_learned: int
    check_ins: int
    current_streak: int
    longest_streak: int
    average_mood_improvement: float


@dataclass(frozen=True)
class CrisisIntervention:
    """Latest intervention for (owner, level). Re-triggering overwrites."""
    owner: str
    level: InterventionLevel
    trigger_reason: str
    risk_label: str
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class TherapeuticResource:
    """Curated self-help resource. Public to read, privileged to write."""
    resource_id: int
    category: str
    name: str
    description: str
    tag: str
    effectiveness_rating: int
    difficulty: str
    applies_to: Tuple[str, ...] = ()
    added_by: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class AnonymousContribution:
    """Running aggregate for one reporting period. Holds no identity."""
    period: str
    contribution_count: int = 0
    score_sum: int = 0


@dataclass(frozen=True)
class AnonymousStats:
    """Public read model of an AnonymousContribution."""
    period: str
    contribution_count: int
    score_sum: int
    average_score: float
