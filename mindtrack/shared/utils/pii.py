"""Principal and free-text hashing for log lines.

Services never log a principal or a journal/chat text in clear form. A
principal is logged as an HMAC-SHA256 keyed with the deployment salt, which
lets one participant's events be correlated without naming them. Free text
is logged only as an unkeyed fingerprint.

The platform installs one PrincipalHasher built from its DeploymentConfig at
startup; hash_pii() uses whichever hasher is installed.
"""
import hashlib
import hmac
import logging
from typing import Optional

from mindtrack.shared.config import DeploymentConfig

logger = logging.getLogger(__name__)

MIN_SALT_LENGTH = 32


class PrincipalHasher:
    """Keyed digest of principal identifiers."""

    def __init__(self, salt: str):
        """Initialize hasher.

        Args:
            salt: Deployment secret, at least MIN_SALT_LENGTH characters

        Raises:
            ValueError: If salt is empty or too short
        """
        if len(salt or "") < MIN_SALT_LENGTH:
            logger.critical(
                "PII_SALT_REJECTED",
                extra={"salt_length": len(salt or ""), "min_length": MIN_SALT_LENGTH}
            )
            raise ValueError(f"PII salt must be at least {MIN_SALT_LENGTH} characters")
        self._key = salt.encode("utf-8")

    @classmethod
    def from_config(cls, config: DeploymentConfig) -> "PrincipalHasher":
        return cls(config.pii_salt)

    def digest(self, principal: str) -> str:
        return hmac.new(self._key, principal.encode("utf-8"), hashlib.sha256).hexdigest()


_hasher: Optional[PrincipalHasher] = None


def install_hasher(hasher: PrincipalHasher) -> None:
    """Make ``hasher`` the one used by hash_pii()."""
    global _hasher
    _hasher = hasher
    logger.info("PII_HASHER_INSTALLED")


def hash_pii(value: str) -> str:
    """Keyed 64-char hex digest of a principal.

    Raises:
        RuntimeError: If no hasher has been installed
    """
    if _hasher is None:
        raise RuntimeError("No principal hasher installed; construct WellnessPlatform first")
    return _hasher.digest(value)


def hash_text_for_audit(text: str) -> str:
    """Fingerprint of a journal note or chat input. Not keyed."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
