"""Therapy sessions and the conversations logged inside them.

Session lifecycle is OPEN -> CLOSED, one way. Outcome fields (mood after,
topics, notes, homework, rating) can only be written by the call that
closes the session.

Every conversation is scanned by the risk engine. A crisis keyword upserts
a CrisisIntervention and makes log_conversation() return the
InterventionLevel instead of the conversation id. Conversations may still
be logged after a session is closed.
"""
import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence, Union

from mindtrack.services.risk_engine import (
    CRISIS_ESCALATION_LEVEL,
    matched_keywords,
    score_from_text,
)
from mindtrack.shared.database import OwnedRepository, RecordStore
from mindtrack.shared.models import (
    Conversation,
    InterventionLevel,
    InvalidInputError,
    NotFoundError,
    SessionStatus,
    TherapySession,
    operation,
)
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import hash_pii, hash_text_for_audit
from mindtrack.shared.validation import (
    validate_conversation,
    validate_session_end,
    validate_session_start,
)
from .crisis_interventions import CrisisInterventionService
from .progress import ProgressService

logger = logging.getLogger(__name__)

SESSION_TABLE = "therapy_sessions"
SESSION_FAMILY = "therapy_session"
CONVERSATION_TABLE = "conversations"
CONVERSATION_FAMILY = "conversation"


class TherapySessionService:
    """Session lifecycle plus conversation logging with crisis detection."""

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        progress: ProgressService,
        interventions: CrisisInterventionService,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        """Initialize service.

        Args:
            store: Backing record store
            guard: Ownership guard shared by all services
            progress: Receives completed sessions
            interventions: Receives keyword-triggered interventions
            clock: Timestamp source (injected for testing)
        """
        self.sessions: OwnedRepository[TherapySession] = OwnedRepository(
            store, guard, SESSION_TABLE, SESSION_FAMILY
        )
        self.conversations: OwnedRepository[Conversation] = OwnedRepository(
            store, guard, CONVERSATION_TABLE, CONVERSATION_FAMILY
        )
        self.progress = progress
        self.interventions = interventions
        self._clock = clock

    def get_session_counter(self) -> int:
        return self.sessions.counter()

    def get_conversation_counter(self) -> int:
        return self.conversations.counter()

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    @operation("THERAPY_SESSION_START")
    def start_therapy_session(
        self,
        caller: str,
        topic: str,
        mood_before: int,
        modality: str,
    ) -> int:
        """Open a session and return its id."""
        validate_session_start(topic, mood_before, modality)

        started_at = self._clock()
        session_id = self.sessions.create(
            lambda new_id: (
                new_id,
                TherapySession(
                    session_id=new_id,
                    owner=caller,
                    topic=topic,
                    mood_before=mood_before,
                    modality=modality,
                    started_at=started_at,
                ),
            )
        )

        logger.info(
            "THERAPY_SESSION_STARTED",
            extra={
                "session_id": session_id,
                "caller_hash": hash_pii(caller),
                "modality": modality,
                "mood_before": mood_before,
            }
        )
        return session_id

    @operation("THERAPY_SESSION_END")
    def end_therapy_session(
        self,
        caller: str,
        session_id: int,
        mood_after: int,
        topics_discussed: Sequence[str],
        progress_notes: str,
        homework: str,
        rating: int,
    ) -> bool:
        """Close an open session and record its outcome.

        Returns:
            OperationResult(True); NOT_FOUND for an unknown id,
            NOT_AUTHORIZED for another owner's session, INVALID_INPUT for a
            closed session or out-of-range outcome fields
        """
        with self.sessions.transaction():
            session = self.sessions.get_for_write(caller, session_id)
            if not session.is_open:
                raise InvalidInputError(f"Session {session_id} is already closed", field="session_id")
            validate_session_end(mood_after, topics_discussed, progress_notes, homework, rating)

            closed = replace(
                session,
                status=SessionStatus.CLOSED,
                mood_after=mood_after,
                topics_discussed=tuple(topics_discussed),
                progress_notes=progress_notes,
                homework=homework,
                rating=rating,
                ended_at=self._clock(),
            )
            self.sessions.save(session_id, closed)
            self.progress.record_completed_session(caller, closed.mood_change)

        logger.info(
            "THERAPY_SESSION_ENDED",
            extra={
                "session_id": session_id,
                "caller_hash": hash_pii(caller),
                "mood_change": closed.mood_change,
                "rating": rating,
            }
        )
        return True

    def get_therapy_session(self, caller: str, session_id: int) -> Optional[TherapySession]:
        return self.sessions.find_for(caller, session_id)

    # ------------------------------------------------------------------
    # Conversations
    # ------------------------------------------------------------------

    @operation("CONVERSATION_LOG")
    def log_conversation(
        self,
        caller: str,
        session_id: int,
        user_input: str,
        bot_response: str,
        context: str,
        technique: str,
        sentiment: str,
    ) -> Union[int, InterventionLevel]:
        """Log one exchange in the caller's session.

        Returns:
            OperationResult with the conversation id, or with the
            InterventionLevel when the input triggered an intervention;
            NOT_FOUND when the session is unknown or not the caller's
        """
        validate_conversation(user_input, bot_response, context, technique, sentiment)
        session = self.sessions.find_for(caller, session_id)
        if session is None:
            raise NotFoundError(f"Session {session_id} not found", field="session_id")

        level = score_from_text(user_input)
        created_at = self._clock()
        conversation_id = self.conversations.create(
            lambda new_id: (
                new_id,
                Conversation(
                    conversation_id=new_id,
                    session_id=session_id,
                    owner=caller,
                    user_input=user_input,
                    bot_response=bot_response,
                    context=context,
                    technique=technique,
                    sentiment=sentiment,
                    intervention_level=level,
                    created_at=created_at,
                ),
            )
        )

        logger.info(
            "CONVERSATION_LOGGED",
            extra={
                "conversation_id": conversation_id,
                "session_id": session_id,
                "session_status": session.status.value,
                "caller_hash": hash_pii(caller),
                "input_hash": hash_text_for_audit(user_input),
                "intervention_level": int(level),
            }
        )

        if level >= CRISIS_ESCALATION_LEVEL:
            self.interventions.record_intervention(
                caller,
                level,
                trigger_reason=f"conversation:{session_id}",
                risk_label="crisis-keyword",
                source="conversation",
            )
            logger.critical(
                "CONVERSATION_CRISIS_DETECTED",
                extra={
                    "conversation_id": conversation_id,
                    "session_id": session_id,
                    "caller_hash": hash_pii(caller),
                    "keyword_count": len(matched_keywords(user_input)),
                    "action": "IMMEDIATE_ESCALATION",
                }
            )

        if level > InterventionLevel.NONE:
            return level
        return conversation_id

    def get_conversation(
        self,
        caller: str,
        session_id: int,
        conversation_id: int,
    ) -> Optional[Conversation]:
        """Read a conversation through its parent session."""
        if self.sessions.find_for(caller, session_id) is None:
            return None
        conversation = self.conversations.find_for(caller, conversation_id)
        if conversation is None or conversation.session_id != session_id:
            return None
        return conversation
