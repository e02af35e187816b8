"""Ownership guard: the single per-user isolation point.

Reads of per-user records go through authorize_read(), which hides records
owned by someone else behind the same None used for a missing record. A
caller therefore cannot probe for the existence of another participant's
data.

authorize_write() is for mutation paths where the caller already knows the
id exists (e.g. closing a session); a mismatch there raises
NotAuthorizedError instead of pretending the record is absent.
"""
import logging
from typing import Optional, TypeVar

from mindtrack.shared.models import NotAuthorizedError
from mindtrack.shared.utils import hash_pii

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OwnershipGuard:
    """Checks callers against record owners and the privileged principal."""

    def __init__(self, privileged_principal: str):
        """Initialize guard.

        Args:
            privileged_principal: Deploy-time identity allowed to curate
                therapeutic resources
        """
        if not privileged_principal:
            raise ValueError("privileged_principal must be a non-empty identifier")
        self._privileged_principal = privileged_principal

        logger.info(
            "OWNERSHIP_GUARD_INITIALIZED",
            extra={"privileged_principal_hash": hash_pii(privileged_principal)}
        )

    def authorize_read(self, identity: str, record: Optional[T]) -> Optional[T]:
        """Return ``record`` only if ``identity`` owns it, else None.

        Args:
            identity: Calling principal
            record: Record fetched from the store, or None

        Returns:
            The record, or None for both "missing" and "not yours"
        """
        if record is None:
            return None

        if getattr(record, "owner", None) != identity:
            logger.warning(
                "OWNERSHIP_READ_DENIED",
                extra={
                    "caller_hash": hash_pii(identity),
                    "record_type": type(record).__name__,
                }
            )
            return None

        return record

    def authorize_write(self, identity: str, record_owner: str) -> None:
        """Raise NotAuthorizedError unless ``identity`` is ``record_owner``."""
        if identity != record_owner:
            logger.warning(
                "OWNERSHIP_WRITE_DENIED",
                extra={
                    "caller_hash": hash_pii(identity),
                    "owner_hash": hash_pii(record_owner),
                }
            )
            raise NotAuthorizedError("Caller does not own this record")

    def is_privileged(self, principal: str) -> bool:
        return principal == self._privileged_principal

    def require_privileged(self, principal: str) -> None:
        """Raise NotAuthorizedError unless ``principal`` is the privileged one."""
        if not self.is_privileged(principal):
            logger.warning(
                "PRIVILEGED_ACCESS_DENIED",
                extra={"caller_hash": hash_pii(principal)}
            )
            raise NotAuthorizedError("Caller is not the privileged principal")
