"""
Job search integrations for various job boards and APIs, plus the
LinkedIn profile lookup client.
"""

from .base import JobSearchProvider, ProviderError
from .google_jobs import GoogleJobsProvider
from .linkedin import LinkedInProvider
from .indeed import IndeedProvider
from .glassdoor import GlassdoorProvider
from .ziprecruiter import ZipRecruiterProvider
from .aggregator import JobAggregator, ProviderRegistration
from .profile_lookup import ProfileLookupClient

__all__ = [
    "JobSearchProvider",
    "ProviderError",
    "GoogleJobsProvider",
    "LinkedInProvider",
    "IndeedProvider",
    "GlassdoorProvider",
    "ZipRecruiterProvider",
    "JobAggregator",
    "ProviderRegistration",
    "ProfileLookupClient",
]
