"""Crisis interventions keyed by (owner, level).

An intervention is recorded either explicitly through
trigger_crisis_intervention() or as a side effect when a conversation or an
assessment reaches the escalation level. Repeated triggers at the same level
overwrite the previous record rather than accumulating.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from mindtrack.services.risk_engine import score_from_label
from mindtrack.shared.database import OwnedRepository, RecordStore
from mindtrack.shared.models import CrisisIntervention, InterventionLevel, operation
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import hash_pii
from mindtrack.shared.validation import validate_crisis_trigger

logger = logging.getLogger(__name__)

CRISIS_INTERVENTION_TABLE = "crisis_interventions"


class CrisisInterventionService:

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.interventions: OwnedRepository[CrisisIntervention] = OwnedRepository(
            store, guard, CRISIS_INTERVENTION_TABLE
        )
        self._clock = clock

    def record_intervention(
        self,
        caller: str,
        level: InterventionLevel,
        trigger_reason: str,
        risk_label: str,
        source: str,
    ) -> CrisisIntervention:
        """Upsert the intervention at (caller, level).

        Args:
            caller: Owner of the intervention
            level: Intervention level, also part of the key
            trigger_reason: Short reason, already validated by the caller
            risk_label: Label that produced the level
            source: "manual", "conversation" or "assessment", for logging
        """
        intervention = CrisisIntervention(
            owner=caller,
            level=level,
            trigger_reason=trigger_reason,
            risk_label=risk_label,
            created_at=self._clock(),
        )
        self.interventions.save((caller, int(level)), intervention)

        log = logger.critical if level is InterventionLevel.HIGH else logger.warning
        log(
            "CRISIS_INTERVENTION_RECORDED",
            extra={
                "caller_hash": hash_pii(caller),
                "level": int(level),
                "source": source,
                "action": "INTERVENTION_UPSERTED",
            }
        )
        return intervention

    @operation("CRISIS_INTERVENTION_TRIGGER")
    def trigger_crisis_intervention(
        self,
        caller: str,
        trigger_reason: str,
        risk_label: str,
    ) -> InterventionLevel:
        """Manually trigger an intervention.

        Returns:
            OperationResult with the level (low=1, medium=2, high=3);
            INVALID_INPUT for any other label
        """
        validate_crisis_trigger(trigger_reason)
        level = score_from_label(risk_label)

        self.record_intervention(caller, level, trigger_reason, risk_label, source="manual")
        return level

    def get_crisis_intervention(
        self,
        caller: str,
        level: int,
    ) -> Optional[CrisisIntervention]:
        return self.interventions.find_for(caller, (caller, int(level)))
