"""Therapeutic resource catalogue.

Resources are public to read and writable only by the privileged principal
configured at deployment. They are keyed by (category, resource_id); ids
come from one counter shared by all categories.
"""
import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from mindtrack.shared.database import BaseRepository, RecordStore
from mindtrack.shared.models import TherapeuticResource, operation
from mindtrack.shared.security import OwnershipGuard
from mindtrack.shared.utils import hash_pii
from mindtrack.shared.validation import validate_resource

logger = logging.getLogger(__name__)

RESOURCE_TABLE = "therapeutic_resources"
RESOURCE_FAMILY = "therapeutic_resource"


class TherapeuticResourceService:

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.resources: BaseRepository[TherapeuticResource] = BaseRepository(
            store, RESOURCE_TABLE, RESOURCE_FAMILY
        )
        self.guard = guard
        self._clock = clock

    def get_resource_counter(self) -> int:
        return self.resources.counter()

    @operation("THERAPEUTIC_RESOURCE_ADD")
    def add_therapeutic_resource(
        self,
        caller: str,
        category: str,
        name: str,
        description: str,
        tag: str,
        effectiveness_rating: int,
        difficulty: str,
        applies_to: Sequence[str] = (),
    ) -> int:
        """Add a resource to the catalogue.

        Returns:
            OperationResult with the resource id; NOT_AUTHORIZED for any
            caller other than the privileged principal
        """
        self.guard.require_privileged(caller)
        validate_resource(category, name, description, tag, effectiveness_rating, difficulty, applies_to)

        created_at = self._clock()
        resource_id = self.resources.create(
            lambda new_id: (
                (category, new_id),
                TherapeuticResource(
                    resource_id=new_id,
                    category=category,
                    name=name,
                    description=description,
                    tag=tag,
                    effectiveness_rating=effectiveness_rating,
                    difficulty=difficulty,
                    applies_to=tuple(applies_to),
                    added_by=caller,
                    created_at=created_at,
                ),
            )
        )

        logger.info(
            "THERAPEUTIC_RESOURCE_ADDED",
            extra={
                "resource_id": resource_id,
                "category": category,
                "caller_hash": hash_pii(caller),
            }
        )
        return resource_id

    def get_therapeutic_resource(
        self,
        category: str,
        resource_id: int,
    ) -> Optional[TherapeuticResource]:
        return self.resources.find((category, resource_id))
