"""Crisis support (safety) plans.

One plan per owner, stored under the owner's principal. The plan text and
the risk level are updated independently: editing the plan keeps the
current risk level, and setting a risk level before any plan exists creates
an empty plan.
"""
import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence

from mindtrack.shared.database import OwnedRepository, RecordStore
from mindtrack.shared.models import CrisisSupportPlan, RiskLabel, operation
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import hash_pii
from mindtrack.shared.validation import validate_crisis_plan, validate_risk_label

logger = logging.getLogger(__name__)

CRISIS_PLAN_TABLE = "crisis_support_plans"


class CrisisPlanService:

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.plans: OwnedRepository[CrisisSupportPlan] = OwnedRepository(
            store, guard, CRISIS_PLAN_TABLE
        )
        self._clock = clock

    def _current_plan(self, caller: str) -> CrisisSupportPlan:
        existing = self.plans.find_for(caller, caller)
        if existing is not None:
            return existing
        return CrisisSupportPlan(owner=caller, updated_at=self._clock())

    @operation("CRISIS_PLAN_UPDATE")
    def update_crisis_support_plan(
        self,
        caller: str,
        emergency_contacts: Sequence[str],
        hotlines: Sequence[str],
        plan_text: str,
        support_network: Sequence[str],
    ) -> bool:
        """Create or replace the caller's plan contents."""
        validate_crisis_plan(emergency_contacts, hotlines, plan_text, support_network)

        with self.plans.transaction():
            plan = self.plans.save(caller, replace(
                self._current_plan(caller),
                emergency_contacts=tuple(emergency_contacts),
                hotlines=tuple(hotlines),
                plan_text=plan_text,
                support_network=tuple(support_network),
                updated_at=self._clock(),
            ))

        logger.info(
            "CRISIS_PLAN_UPDATED",
            extra={
                "caller_hash": hash_pii(caller),
                "contact_count": len(plan.emergency_contacts),
                "hotline_count": len(plan.hotlines),
                "risk_level": plan.risk_level.value,
            }
        )
        return True

    @operation("CRISIS_RISK_LEVEL_UPDATE")
    def update_crisis_risk_level(self, caller: str, risk_level: str) -> bool:
        """Set the plan's risk level ("low", "medium" or "high")."""
        label = validate_risk_label(risk_level)

        with self.plans.transaction():
            self.plans.save(
                caller,
                replace(self._current_plan(caller), risk_level=label, updated_at=self._clock()),
            )

        log = logger.warning if label is RiskLabel.HIGH else logger.info
        log(
            "CRISIS_RISK_LEVEL_UPDATED",
            extra={"caller_hash": hash_pii(caller), "risk_level": label.value}
        )
        return True

    def get_crisis_support_plan(self, caller: str) -> Optional[CrisisSupportPlan]:
        return self.plans.find_for(caller, caller)
