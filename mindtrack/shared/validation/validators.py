"""Payload validation, one function per entity family.

Every function is pure: it either returns None or raises InvalidInputError
naming the first field it found out of bounds. Services call the validator
before touching the store, so a rejected payload never leaves a partial
write behind.
"""
from typing import Any, Optional, Sequence

from mindtrack.shared.models import InvalidInputError, RiskLabel
from .limits import LIMITS


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

def require_int(name: str, value: Any) -> None:
    # bool is an int subclass; True must not pass as a score of 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be an integer", field=name)


def require_range(name: str, value: Any, low: int, high: int) -> None:
    """Check ``low <= value <= high`` for an integer value."""
    require_int(name, value)
    if not low <= value <= high:
        raise InvalidInputError(
            f"{name} must be within [{low}, {high}], got {value}", field=name
        )


def require_length(name: str, value: Any, max_length: int, min_length: int = 0) -> None:
    """Check a string's length lies within [min_length, max_length]."""
    if not isinstance(value, str):
        raise InvalidInputError(f"{name} must be a string", field=name)
    if not min_length <= len(value) <= max_length:
        raise InvalidInputError(
            f"{name} length must be within [{min_length}, {max_length}]", field=name
        )


def require_items(
    name: str,
    items: Any,
    max_items: int,
    max_item_length: int,
) -> None:
    """Check a list of strings: element count and each element's length."""
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise InvalidInputError(f"{name} must be a list", field=name)
    if len(items) > max_items:
        raise InvalidInputError(f"{name} holds at most {max_items} items", field=name)
    for item in items:
        require_length(name, item, max_item_length, min_length=1)


# ---------------------------------------------------------------------------
# Mood tracker families
# ---------------------------------------------------------------------------

MOOD_SCORE_FIELDS = (
    "mood_score",
    "energy_level",
    "stress_level",
    "anxiety_level",
    "sleep_quality",
    "social_interaction",
    "physical_activity",
)


def validate_mood_entry(
    scores: dict,
    notes: str,
    triggers: Sequence[str],
    activities: Sequence[str],
    medications: Sequence[str],
) -> None:
    """Validate a mood entry.

    Args:
        scores: Mapping with exactly the seven MOOD_SCORE_FIELDS
        notes: Free-text journal note
        triggers: Stress triggers
        activities: Activities done that day
        medications: Medications taken
    """
    if set(scores) != set(MOOD_SCORE_FIELDS):
        raise InvalidInputError("mood entry requires all seven scores", field="scores")
    for name in MOOD_SCORE_FIELDS:
        require_range(name, scores[name], LIMITS.SCORE_MIN, LIMITS.SCORE_MAX)

    require_length("notes", notes, LIMITS.NOTES_MAX)
    require_items("triggers", triggers, LIMITS.TRIGGERS_MAX_ITEMS, LIMITS.TAG_MAX)
    require_items("activities", activities, LIMITS.ACTIVITIES_MAX_ITEMS, LIMITS.TAG_MAX)
    require_items("medications", medications, LIMITS.MEDICATIONS_MAX_ITEMS, LIMITS.TAG_MAX)


def validate_insight_request(entry_ids: Sequence[int]) -> None:
    if isinstance(entry_ids, (str, bytes)) or not isinstance(entry_ids, Sequence):
        raise InvalidInputError("entry_ids must be a list", field="entry_ids")
    if not 1 <= len(entry_ids) <= LIMITS.INSIGHT_MAX_ENTRIES:
        raise InvalidInputError(
            f"entry_ids must hold 1 to {LIMITS.INSIGHT_MAX_ENTRIES} ids", field="entry_ids"
        )
    for entry_id in entry_ids:
        require_int("entry_ids", entry_id)
    if len(set(entry_ids)) != len(entry_ids):
        raise InvalidInputError("entry_ids must not repeat", field="entry_ids")


def validate_wellness_goal(
    name: str,
    target_value: int,
    target_date: int,
    milestones: Sequence[int],
) -> None:
    require_length("name", name, LIMITS.GOAL_NAME_MAX, min_length=1)
    require_range("target_value", target_value, 1, LIMITS.GOAL_TARGET_MAX)
    require_int("target_date", target_date)
    if target_date < 0:
        raise InvalidInputError("target_date must not be negative", field="target_date")

    if isinstance(milestones, (str, bytes)) or not isinstance(milestones, Sequence):
        raise InvalidInputError("milestones must be a list", field="milestones")
    if len(milestones) > LIMITS.MILESTONES_MAX_ITEMS:
        raise InvalidInputError(
            f"milestones holds at most {LIMITS.MILESTONES_MAX_ITEMS} items", field="milestones"
        )
    previous: Optional[int] = None
    for milestone in milestones:
        require_range("milestones", milestone, 1, target_value)
        if previous is not None and milestone <= previous:
            raise InvalidInputError("milestones must be strictly ascending", field="milestones")
        previous = milestone


def validate_goal_progress(progress: int) -> None:
    require_range("progress", progress, LIMITS.PERCENT_MIN, LIMITS.PERCENT_MAX)


def validate_crisis_plan(
    emergency_contacts: Sequence[str],
    hotlines: Sequence[str],
    plan_text: str,
    support_network: Sequence[str],
) -> None:
    require_items("emergency_contacts", emergency_contacts, LIMITS.CONTACTS_MAX_ITEMS, LIMITS.CONTACT_MAX)
    require_items("hotlines", hotlines, LIMITS.HOTLINES_MAX_ITEMS, LIMITS.CONTACT_MAX)
    require_length("plan_text", plan_text, LIMITS.PLAN_TEXT_MAX)
    require_items("support_network", support_network, LIMITS.SUPPORT_NETWORK_MAX_ITEMS, LIMITS.CONTACT_MAX)


def validate_risk_label(label: Any) -> RiskLabel:
    """Parse a crisis-plan risk label ("low", "medium", "high")."""
    try:
        return RiskLabel(label)
    except ValueError:
        raise InvalidInputError(f"Unknown risk label {label!r}", field="risk_level") from None


def validate_contribution(score: int, period: str) -> None:
    require_range("score", score, LIMITS.SCORE_MIN, LIMITS.SCORE_MAX)
    require_length("period", period, LIMITS.PERIOD_MAX, min_length=1)


# ---------------------------------------------------------------------------
# Therapy bot families
# ---------------------------------------------------------------------------

def validate_session_start(topic: str, mood_before: int, modality: str) -> None:
    require_length("topic", topic, LIMITS.TOPIC_MAX, min_length=1)
    require_range("mood_before", mood_before, LIMITS.SCORE_MIN, LIMITS.SCORE_MAX)
    require_length("modality", modality, LIMITS.MODALITY_MAX, min_length=1)


def validate_session_end(
    mood_after: int,
    topics_discussed: Sequence[str],
    progress_notes: str,
    homework: str,
    rating: int,
) -> None:
    require_range("mood_after", mood_after, LIMITS.SCORE_MIN, LIMITS.SCORE_MAX)
    require_items("topics_discussed", topics_discussed, LIMITS.TOPICS_MAX_ITEMS, LIMITS.TOPIC_MAX)
    require_length("progress_notes", progress_notes, LIMITS.NOTES_MAX)
    require_length("homework", homework, LIMITS.HOMEWORK_MAX)
    require_range("rating", rating, LIMITS.RATING_MIN, LIMITS.RATING_MAX)


def validate_conversation(
    user_input: str,
    bot_response: str,
    context: str,
    technique: str,
    sentiment: str,
) -> None:
    require_length("user_input", user_input, LIMITS.USER_INPUT_MAX, min_length=1)
    require_length("bot_response", bot_response, LIMITS.BOT_RESPONSE_MAX)
    require_length("context", context, LIMITS.CONTEXT_MAX)
    require_length("technique", technique, LIMITS.TECHNIQUE_MAX)
    require_length("sentiment", sentiment, LIMITS.SENTIMENT_MAX)


def validate_assessment(
    instrument: str,
    questions_answered: int,
    total_questions: int,
    raw_score: int,
) -> None:
    """Validate an assessment submission.

    questions_answered may not exceed total_questions, and raw_score may not
    exceed what total_questions items scored 0-3 can produce.
    """
    require_length("instrument", instrument, LIMITS.INSTRUMENT_MAX, min_length=1)
    require_range("total_questions", total_questions, 1, LIMITS.QUESTIONS_MAX)
    require_range("questions_answered", questions_answered, 0, total_questions)
    require_range("raw_score", raw_score, 0, total_questions * LIMITS.MAX_ITEM_SCORE)


def validate_coping_strategy(name: str) -> None:
    require_length("strategy", name, LIMITS.STRATEGY_NAME_MAX, min_length=1)


def validate_crisis_trigger(trigger_reason: str) -> None:
    require_length("trigger_reason", trigger_reason, LIMITS.TRIGGER_REASON_MAX, min_length=1)


def validate_resource(
    category: str,
    name: str,
    description: str,
    tag: str,
    effectiveness_rating: int,
    difficulty: str,
    applies_to: Sequence[str],
) -> None:
    require_length("category", category, LIMITS.CATEGORY_MAX, min_length=1)
    require_length("name", name, LIMITS.RESOURCE_NAME_MAX, min_length=1)
    require_length("description", description, LIMITS.DESCRIPTION_MAX)
    require_length("tag", tag, LIMITS.TAG_MAX)
    require_range("effectiveness_rating", effectiveness_rating, LIMITS.SCORE_MIN, LIMITS.SCORE_MAX)
    require_length("difficulty", difficulty, LIMITS.DIFFICULTY_MAX)
    require_items("applies_to", applies_to, LIMITS.APPLIES_TO_MAX_ITEMS, LIMITS.TAG_MAX)
