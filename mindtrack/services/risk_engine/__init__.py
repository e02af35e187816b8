"""Risk Engine: deterministic intervention-level scoring.

Maps assessment scores, risk labels and crisis keywords to an
InterventionLevel (NONE=0, LOW=1, MEDIUM=2, HIGH=3). Keyword detection is a
fixed case-sensitive lookup, not language understanding.

Components:
- config.py: Thresholds, keyword set, label table
- severity.py: score_from_assessment, score_from_text, score_from_label

Usage:
    from mindtrack.services.risk_engine import score_from_text
    level = score_from_text(user_input)
"""

from .config import (
    AssessmentThresholds,
    CRISIS_ESCALATION_LEVEL,
    CRISIS_KEYWORDS,
    RISK_LABEL_LEVELS,
    ENGINE_VERSION,
)
from .severity import (
    normalize_assessment_score,
    level_from_ratio,
    score_from_assessment,
    score_from_text,
    score_from_label,
    matched_keywords,
)

__all__ = [
    "AssessmentThresholds",
    "CRISIS_ESCALATION_LEVEL",
    "CRISIS_KEYWORDS",
    "RISK_LABEL_LEVELS",
    "ENGINE_VERSION",
    "normalize_assessment_score",
    "level_from_ratio",
    "score_from_assessment",
    "score_from_text",
    "score_from_label",
    "matched_keywords",
]
