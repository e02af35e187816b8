"""Therapy Service: sessions, conversations, assessments and progress.

Conversations and assessments are scored by the risk engine. A crisis
keyword or an assessment at the escalation level upserts a
CrisisIntervention for the caller, and the operation returns the
InterventionLevel instead of the new record id.

Components:
- sessions.py: TherapySessionService (sessions + conversation logging)
- assessments.py: AssessmentService
- progress.py: ProgressService (check-ins, streaks, coping strategies)
- crisis_interventions.py: CrisisInterventionService
- resources.py: TherapeuticResourceService (privileged writes)
"""

from .crisis_interventions import CrisisInterventionService
from .progress import ProgressService
from .sessions import TherapySessionService
from .assessments import AssessmentService
from .resources import TherapeuticResourceService

__all__ = [
    "CrisisInterventionService",
    "ProgressService",
    "TherapySessionService",
    "AssessmentService",
    "TherapeuticResourceService",
]
