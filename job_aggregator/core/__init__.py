"""Core models, normalization and ranking for job aggregation."""

from .models import (
    SearchCriteria,
    Posting,
    SourceResult,
    AggregatedResult,
    Profile,
    ProfileSearchParams,
)
from .ranking import RankedCandidate, deduplicate, rank

__all__ = [
    "SearchCriteria",
    "Posting",
    "SourceResult",
    "AggregatedResult",
    "Profile",
    "ProfileSearchParams",
    "RankedCandidate",
    "deduplicate",
    "rank",
]
