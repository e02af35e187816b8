"""Anonymous research contributions.

Participants contribute a 0-10 wellbeing score to a reporting period
("2024-Q1"). Only the running count and sum per period are kept; the
contributor's identity is discarded at ingestion and appears in logs only
as a salted hash.
"""
import logging
from dataclasses import replace
from typing import Optional

from mindtrack.shared.database import BaseRepository, RecordStore
from mindtrack.shared.models import AnonymousContribution, AnonymousStats, operation
from mindtrack.shared.utils import hash_pii
from mindtrack.shared.validation import validate_contribution

logger = logging.getLogger(__name__)

ANONYMOUS_TABLE = "anonymous_contributions"


class AnonymousResearchService:
    """Aggregates anonymous contributions by period."""

    def __init__(self, store: RecordStore):
        self.contributions: BaseRepository[AnonymousContribution] = BaseRepository(
            store, ANONYMOUS_TABLE
        )

    @operation("ANONYMOUS_CONTRIBUTION")
    def contribute_anonymous_data(self, caller: str, score: int, period: str) -> bool:
        """Fold one score into the period aggregate.

        Args:
            caller: Contributing principal, used for the log hash only
            score: Wellbeing score 0-10
            period: Reporting period label, 1-20 characters
        """
        validate_contribution(score, period)

        with self.contributions.transaction():
            current = self.contributions.find(period) or AnonymousContribution(period=period)
            updated = self.contributions.save(period, replace(
                current,
                contribution_count=current.contribution_count + 1,
                score_sum=current.score_sum + score,
            ))

        logger.info(
            "ANONYMOUS_CONTRIBUTION_RECEIVED",
            extra={
                "period": period,
                "contributor_hash": hash_pii(caller),
                "contribution_count": updated.contribution_count,
            }
        )
        return True

    def get_anonymous_stats(self, period: str) -> Optional[AnonymousStats]:
        aggregate = self.contributions.find(period)
        if aggregate is None or aggregate.contribution_count == 0:
            return None

        return AnonymousStats(
            period=aggregate.period,
            contribution_count=aggregate.contribution_count,
            score_sum=aggregate.score_sum,
            average_score=aggregate.score_sum / aggregate.contribution_count,
        )
