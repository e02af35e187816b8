"""Intervention level and risk label domain models.

Levels are ordinal buckets used to route a participant toward crisis
support. They are illustrative labels, not clinical findings.
"""
from enum import Enum, IntEnum


class InterventionLevel(IntEnum):
    """Ordinal crisis-intervention severity.

    IntEnum so a level compares and serializes as its wire integer
    (HIGH == 3) while still being distinguishable from a plain record id
    via isinstance().
    """
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class RiskLabel(Enum):
    """Self-reported or clinician-assigned risk label."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SessionStatus(Enum):
    """Therapy session lifecycle. OPEN -> CLOSED only."""
    OPEN = "open"
    CLOSED = "closed"


class MoodTrend(Enum):
    """Direction of mood across the entries of an insight."""
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"
