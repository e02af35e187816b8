"""Standardized mental-health assessments (PHQ-9, GAD-7, ...).

The intervention level is derived from the raw score by the risk engine and
stored with the assessment. When it reaches the escalation level a
CrisisIntervention is upserted and the level is returned in place of the
assessment id.
"""
import logging
from datetime import datetime
from typing import Callable, Optional, Union

from mindtrack.services.risk_engine import (
    CRISIS_ESCALATION_LEVEL,
    level_from_ratio,
    normalize_assessment_score,
)
from mindtrack.shared.database import OwnedRepository, RecordStore
from mindtrack.shared.models import Assessment, InterventionLevel, operation
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import hash_pii
from mindtrack.shared.validation import validate_assessment
from .crisis_interventions import CrisisInterventionService

logger = logging.getLogger(__name__)

ASSESSMENT_TABLE = "assessments"
ASSESSMENT_FAMILY = "assessment"


class AssessmentService:

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        interventions: CrisisInterventionService,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.assessments: OwnedRepository[Assessment] = OwnedRepository(
            store, guard, ASSESSMENT_TABLE, ASSESSMENT_FAMILY
        )
        self.interventions = interventions
        self._clock = clock

    def get_assessment_counter(self) -> int:
        return self.assessments.counter()

    @operation("ASSESSMENT_CONDUCT")
    def conduct_assessment(
        self,
        caller: str,
        instrument: str,
        questions_answered: int,
        total_questions: int,
        raw_score: int,
    ) -> Union[int, InterventionLevel]:
        """Score and store an assessment.

        Returns:
            OperationResult with InterventionLevel.HIGH when the score
            escalates, otherwise the new assessment id
        """
        validate_assessment(instrument, questions_answered, total_questions, raw_score)

        normalized = normalize_assessment_score(raw_score, total_questions)
        level = level_from_ratio(normalized)
        created_at = self._clock()
        assessment_id = self.assessments.create(
            lambda new_id: (
                new_id,
                Assessment(
                    assessment_id=new_id,
                    owner=caller,
                    instrument=instrument,
                    questions_answered=questions_answered,
                    total_questions=total_questions,
                    raw_score=raw_score,
                    normalized_score=normalized,
                    intervention_level=level,
                    created_at=created_at,
                ),
            )
        )

        logger.info(
            "ASSESSMENT_CONDUCTED",
            extra={
                "assessment_id": assessment_id,
                "caller_hash": hash_pii(caller),
                "instrument": instrument,
                "normalized_score": round(normalized, 3),
                "intervention_level": int(level),
            }
        )

        if level >= CRISIS_ESCALATION_LEVEL:
            self.interventions.record_intervention(
                caller,
                level,
                trigger_reason=f"assessment:{instrument}",
                risk_label=level.name.lower(),
                source="assessment",
            )
            return level
        return assessment_id

    def get_assessment(self, caller: str, assessment_id: int) -> Optional[Assessment]:
        return self.assessments.find_for(caller, assessment_id)
