"""Authorization for per-user records and privileged writes."""
from .ownership import OwnershipGuard

__all__ = ["OwnershipGuard"]
