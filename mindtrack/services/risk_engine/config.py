"""Risk engine thresholds and lookup tables.

All tables are built once at import and are read-only afterwards.

Assessment scoring normalizes the raw score against a ceiling of
``max(total_questions * 3, 27)``: instruments score each item 0-3, and 27
(the PHQ-9 full-scale maximum) is the reference floor so a short screener
cannot reach HIGH on a handful of points.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping

from mindtrack.shared.models import InterventionLevel


@dataclass(frozen=True)
class AssessmentThresholds:
    """Normalized-ratio cutoffs (inclusive lower bounds) per level."""
    HIGH_MIN: float = 0.8
    MEDIUM_MIN: float = 0.6
    LOW_MIN: float = 0.4
    MAX_ITEM_SCORE: int = 3
    REFERENCE_CEILING: int = 27     # PHQ-9 maximum


# Levels at or above this upsert a CrisisIntervention record
CRISIS_ESCALATION_LEVEL = InterventionLevel.HIGH

# Case-sensitive substring matches. Fixed lookup, not language understanding:
# "Suicide" or "s u i c i d e" do not match.
CRISIS_KEYWORDS: FrozenSet[str] = frozenset({
    "suicide",
    "suicidal",
    "kill myself",
    "end my life",
    "want to die",
    "self-harm",
    "hurt myself",
    "harm myself",
    "overdose",
})

RISK_LABEL_LEVELS: Mapping[str, InterventionLevel] = MappingProxyType({
    "low": InterventionLevel.LOW,
    "medium": InterventionLevel.MEDIUM,
    "high": InterventionLevel.HIGH,
})

ENGINE_VERSION = "2026.10.1"
