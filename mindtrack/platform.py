"""Wires every MindTrack service over one record store and one guard."""
import logging
from datetime import datetime
from typing import Callable, Optional

from mindtrack.services.mood_service import (
    CrisisPlanService,
    MoodEntryService,
    MoodInsightService,
    WellnessGoalService,
)
from mindtrack.services.research_service import AnonymousResearchService
from mindtrack.services.therapy_service import (
    AssessmentService,
    CrisisInterventionService,
    ProgressService,
    TherapeuticResourceService,
    TherapySessionService,
)
from mindtrack.shared.config import DeploymentConfig
from mindtrack.shared.database import InMemoryRecordStore, RecordStore
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import PrincipalHasher, install_hasher

logger = logging.getLogger(__name__)


class WellnessPlatform:
    """Facade holding the entity services.

    All services share the same store, so id counters and records are
    process-wide, and the same guard, so isolation rules are uniform.
    """

    def __init__(
        self,
        config: Optional[DeploymentConfig] = None,
        store: Optional[RecordStore] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        """Initialize platform.

        Args:
            config: Deployment configuration (defaults to from_env())
            store: Record store (defaults to a fresh in-memory store)
            clock: Timestamp source shared by all services
        """
        self.config = config or DeploymentConfig.from_env()
        install_hasher(PrincipalHasher.from_config(self.config))

        self.store = store or InMemoryRecordStore()
        self.guard = OwnershipGuard(self.config.privileged_principal)

        self.mood_entries = MoodEntryService(self.store, self.guard, clock)
        self.insights = MoodInsightService(self.store, self.guard, self.mood_entries, clock)
        self.goals = WellnessGoalService(self.store, self.guard, clock)
        self.crisis_plans = CrisisPlanService(self.store, self.guard, clock)

        self.interventions = CrisisInterventionService(self.store, self.guard, clock)
        self.progress = ProgressService(self.store, self.guard, clock)
        self.sessions = TherapySessionService(
            self.store, self.guard, self.progress, self.interventions, clock
        )
        self.assessments = AssessmentService(self.store, self.guard, self.interventions, clock)
        self.resources = TherapeuticResourceService(self.store, self.guard, clock)

        self.research = AnonymousResearchService(self.store)

        logger.info("WELLNESS_PLATFORM_INITIALIZED")

    def counters(self) -> dict:
        """Current value of every id family counter."""
        return {
            "entry": self.mood_entries.get_entry_counter(),
            "goal": self.goals.get_goal_counter(),
            "insight": self.insights.get_insight_counter(),
            "session": self.sessions.get_session_counter(),
            "conversation": self.sessions.get_conversation_counter(),
            "assessment": self.assessments.get_assessment_counter(),
            "resource": self.resources.get_resource_counter(),
        }
