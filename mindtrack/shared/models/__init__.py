"""Shared domain models for the MindTrack platform."""
from .risk import (
    InterventionLevel,
    RiskLabel,
    SessionStatus,
    MoodTrend,
)
from .result import (
    ErrorCode,
    WellnessError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
    OperationResult,
    operation,
)
from .records import (
    MoodEntry,
    MoodInsight,
    WellnessGoal,
    CrisisSupportPlan,
    TherapySession,
    Conversation,
    Assessment,
    ProgressTracking,
    SessionStatistics,
    CrisisIntervention,
    TherapeuticResource,
    AnonymousContribution,
    AnonymousStats,
)

__all__ = [
    "InterventionLevel",
    "RiskLabel",
    "SessionStatus",
    "MoodTrend",
    "ErrorCode",
    "WellnessError",
    "InvalidInputError",
    "NotAuthorizedError",
    "NotFoundError",
    "OperationResult",
    "operation",
    "MoodEntry",
    "MoodInsight",
    "WellnessGoal",
    "CrisisSupportPlan",
    "TherapySession",
    "Conversation",
    "Assessment",
    "ProgressTracking",
    "SessionStatistics",
    "CrisisIntervention",
    "TherapeuticResource",
    "AnonymousContribution",
    "AnonymousStats",
]
