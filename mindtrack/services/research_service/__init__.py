"""Research Service: anonymous aggregate statistics.

Aggregates are keyed by reporting period only. No record in this service
stores a principal identifier.
"""

from .anonymous_stats import AnonymousResearchService

__all__ = ["AnonymousResearchService"]
