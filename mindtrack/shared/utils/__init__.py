"""Shared utilities for the MindTrack platform."""
from .pii import (
    PrincipalHasher,
    install_hasher,
    hash_pii,
    hash_text_for_audit,
)

__all__ = [
    "PrincipalHasher",
    "install_hasher",
    "hash_pii",
    "hash_text_for_audit",
]
