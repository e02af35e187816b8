"""Deployment configuration.

Loaded once at startup. In development the defaults below are used; in
production both values must come from the environment.
"""
import os
from dataclasses import dataclass

DEFAULT_PRIVILEGED_PRINCIPAL = "deployer"
DEFAULT_DEV_SALT = "default_dev_salt_change_in_production_32chars"


@dataclass(frozen=True)
class DeploymentConfig:
    """Deploy-time identity and secrets.

    Attributes:
        privileged_principal: The only principal allowed to curate
            therapeutic resources
        pii_salt: Salt for hashing principals in logs (>= 32 chars)
    """
    privileged_principal: str = DEFAULT_PRIVILEGED_PRINCIPAL
    pii_salt: str = DEFAULT_DEV_SALT

    @classmethod
    def from_env(cls) -> "DeploymentConfig":
        """Create config from environment variables.

        Environment variables:
            MINDTRACK_PRIVILEGED_PRINCIPAL: Resource curator principal
            PII_HASH_SALT: Log hashing salt
        """
        return cls(
            privileged_principal=os.getenv("MINDTRACK_PRIVILEGED_PRINCIPAL", DEFAULT_PRIVILEGED_PRINCIPAL),
            pii_salt=os.getenv("PII_HASH_SALT", DEFAULT_DEV_SALT),
        )
