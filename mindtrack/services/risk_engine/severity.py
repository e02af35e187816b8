"""Deterministic intervention-level scoring.

Three entry points, all pure:
- score_from_assessment(): normalized questionnaire score -> level
- score_from_text(): crisis keyword present -> HIGH, else NONE
- score_from_label(): "low"/"medium"/"high" -> 1/2/3

score_from_assessment() and score_from_text() are total and never raise.
score_from_label() rejects unknown labels with InvalidInputError so a typo
cannot silently downgrade a crisis report.
"""
import logging
from typing import List

from mindtrack.shared.models import InterventionLevel, InvalidInputError
from .config import (
    CRISIS_KEYWORDS,
    RISK_LABEL_LEVELS,
    AssessmentThresholds,
)

logger = logging.getLogger(__name__)

_THRESHOLDS = AssessmentThresholds()

# Sorted once so matched_keywords() output is stable across runs
_KEYWORDS_SORTED = tuple(sorted(CRISIS_KEYWORDS))


def normalize_assessment_score(raw_score: int, total_questions: int) -> float:
    """Ratio of raw_score to the instrument ceiling, clamped to [0.0, 1.0].

    Args:
        raw_score: Sum of item scores
        total_questions: Number of items on the instrument

    Returns:
        0.0 for non-positive inputs, otherwise raw / ceiling capped at 1.0
    """
    if raw_score <= 0 or total_questions <= 0:
        return 0.0
    ceiling = max(total_questions * _THRESHOLDS.MAX_ITEM_SCORE, _THRESHOLDS.REFERENCE_CEILING)
    return min(raw_score / ceiling, 1.0)


def level_from_ratio(ratio: float) -> InterventionLevel:
    if ratio >= _THRESHOLDS.HIGH_MIN:
        return InterventionLevel.HIGH
    if ratio >= _THRESHOLDS.MEDIUM_MIN:
        return InterventionLevel.MEDIUM
    if ratio >= _THRESHOLDS.LOW_MIN:
        return InterventionLevel.LOW
    return InterventionLevel.NONE


def score_from_assessment(raw_score: int, total_questions: int) -> InterventionLevel:
    """Map an assessment score to an intervention level.

    Examples:
        >>> score_from_assessment(25, 9)    # PHQ-9, 25/27
        <InterventionLevel.HIGH: 3>
        >>> score_from_assessment(20, 7)    # GAD-7, 20/27
        <InterventionLevel.MEDIUM: 2>
    """
    return level_from_ratio(normalize_assessment_score(raw_score, total_questions))


def matched_keywords(text: str) -> List[str]:
    """Crisis keywords occurring in ``text`` (case-sensitive substrings)."""
    if not text:
        return []
    return [keyword for keyword in _KEYWORDS_SORTED if keyword in text]


def score_from_text(text: str) -> InterventionLevel:
    """HIGH if any crisis keyword occurs in ``text``, otherwise NONE."""
    if matched_keywords(text):
        return InterventionLevel.HIGH
    return InterventionLevel.NONE


def score_from_label(label: str) -> InterventionLevel:
    """Map a risk label to its level.

    Raises:
        InvalidInputError: For any label other than low, medium or high
    """
    level = RISK_LABEL_LEVELS.get(label) if isinstance(label, str) else None
    if level is None:
        logger.warning("RISK_LABEL_REJECTED", extra={"label_length": len(str(label))})
        raise InvalidInputError(f"Unknown risk label {label!r}", field="risk_label")
    return level
