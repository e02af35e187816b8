"""Field limits for every entity family.

Closed intervals for scores, maximum string lengths and maximum list sizes.
Changing a limit changes what payloads are accepted, so the values are
frozen at import time.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class FieldLimits:
    # Score scales (closed intervals)
    SCORE_MIN: int = 0
    SCORE_MAX: int = 10
    RATING_MIN: int = 1
    RATING_MAX: int = 5
    PERCENT_MIN: int = 0
    PERCENT_MAX: int = 100

    # Mood entries
    NOTES_MAX: int = 500
    TAG_MAX: int = 50
    TRIGGERS_MAX_ITEMS: int = 10
    ACTIVITIES_MAX_ITEMS: int = 10
    MEDICATIONS_MAX_ITEMS: int = 5
    INSIGHT_MAX_ENTRIES: int = 30

    # Goals
    GOAL_NAME_MAX: int = 50
    GOAL_TARGET_MAX: int = 1_000_000
    MILESTONES_MAX_ITEMS: int = 10

    # Crisis plans and interventions
    CONTACT_MAX: int = 100
    CONTACTS_MAX_ITEMS: int = 5
    HOTLINES_MAX_ITEMS: int = 5
    SUPPORT_NETWORK_MAX_ITEMS: int = 10
    PLAN_TEXT_MAX: int = 1000
    TRIGGER_REASON_MAX: int = 100

    # Therapy sessions and conversations
    TOPIC_MAX: int = 50
    MODALITY_MAX: int = 50
    TOPICS_MAX_ITEMS: int = 10
    HOMEWORK_MAX: int = 200
    USER_INPUT_MAX: int = 500
    BOT_RESPONSE_MAX: int = 1000
    CONTEXT_MAX: int = 100
    TECHNIQUE_MAX: int = 50
    SENTIMENT_MAX: int = 20

    # Assessments
    INSTRUMENT_MAX: int = 50
    QUESTIONS_MAX: int = 100
    MAX_ITEM_SCORE: int = 3

    # Progress tracking
    STRATEGY_NAME_MAX: int = 50
    STRATEGIES_MAX_ITEMS: int = 20

    # Therapeutic resources
    CATEGORY_MAX: int = 50
    RESOURCE_NAME_MAX: int = 100
    DESCRIPTION_MAX: int = 500
    DIFFICULTY_MAX: int = 20
    APPLIES_TO_MAX_ITEMS: int = 10

    # Anonymous research
    PERIOD_MAX: int = 20


LIMITS = FieldLimits()
