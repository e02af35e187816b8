"""Input validation for MindTrack payloads.

Pure predicates; each raises InvalidInputError (code 400) on the first
violated constraint and never writes anything.
"""
from .limits import FieldLimits, LIMITS
from .validators import (
    MOOD_SCORE_FIELDS,
    require_int,
    require_range,
    require_length,
    require_items,
    validate_mood_entry,
    validate_insight_request,
    validate_wellness_goal,
    validate_goal_progress,
    validate_crisis_plan,
    validate_risk_label,
    validate_contribution,
    validate_session_start,
    validate_session_end,
    validate_conversation,
    validate_assessment,
    validate_coping_strategy,
    validate_crisis_trigger,
    validate_resource,
)

__all__ = [
    "FieldLimits",
    "LIMITS",
    "MOOD_SCORE_FIELDS",
    "require_int",
    "require_range",
    "require_length",
    "require_items",
    "validate_mood_entry",
    "validate_insight_request",
    "validate_wellness_goal",
    "validate_goal_progress",
    "validate_crisis_plan",
    "validate_risk_label",
    "validate_contribution",
    "validate_session_start",
    "validate_session_end",
    "validate_conversation",
    "validate_assessment",
    "validate_coping_strategy",
    "validate_crisis_trigger",
    "validate_resource",
]
