"""
Job Aggregator - Combines results from multiple job search providers.

A search fans out to every registered provider in parallel and waits
for all of them to settle. A provider that raises is recorded as a
failed SourceResult and never aborts the others. Postings from
successful providers are deduplicated (the highest-priority provider
wins a collision) and ranked against the search criteria.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional
import logging
import time

from .base import JobSearchProvider
from .glassdoor import GlassdoorProvider
from .google_jobs import GoogleJobsProvider
from .indeed import IndeedProvider
from .linkedin import LinkedInProvider
from .ziprecruiter import ZipRecruiterProvider
from job_aggregator.core.models import (
    AggregatedResult,
    Posting,
    SearchCriteria,
    SourceResult,
)
from job_aggregator.core.ranking import (
    UNKNOWN_PRIORITY,
    RankedCandidate,
    deduplicate,
    rank,
)


@dataclass(frozen=True)
class ProviderRegistration:
    """A provider and its dedup/ranking priority (lower wins)."""
    provider: JobSearchProvider
    priority: int

    @property
    def name(self) -> str:
        return self.provider.name


class JobAggregator:
    """Aggregates job listings from multiple providers."""

    def __init__(
        self,
        config: Optional[dict] = None,
        providers: Optional[list[ProviderRegistration]] = None,
    ):
        """
        Initialize the job aggregator.

        Args:
            config: Dictionary containing provider settings
                   e.g., {"serpapi_api_key": "...", "rapidapi_api_key": "...",
                          "request_timeout": 30}
            providers: Explicit registrations, replacing the default set
        """
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

        if providers is not None:
            self.registrations: list[ProviderRegistration] = list(providers)
        else:
            self.registrations = self._default_registrations()

    def _default_registrations(self) -> list[ProviderRegistration]:
        timeout = self.config.get("request_timeout", JobSearchProvider.DEFAULT_TIMEOUT)
        rapidapi_key = self.config.get("rapidapi_api_key")

        return [
            ProviderRegistration(
                GoogleJobsProvider(self.config.get("serpapi_api_key"), timeout), 1
            ),
            ProviderRegistration(LinkedInProvider(rapidapi_key, timeout), 2),
            ProviderRegistration(IndeedProvider(rapidapi_key, timeout), 3),
            ProviderRegistration(GlassdoorProvider(rapidapi_key, timeout), 4),
            ProviderRegistration(ZipRecruiterProvider(rapidapi_key, timeout), 5),
        ]

    @property
    def providers(self) -> list[JobSearchProvider]:
        return [r.provider for r in self.registrations]

    def add_provider(self, provider: JobSearchProvider, priority: Optional[int] = None) -> None:
        """Add a custom provider; defaults to the lowest precedence so far."""
        if priority is None:
            priority = max((r.priority for r in self.registrations), default=0) + 1
        self.registrations.append(ProviderRegistration(provider, priority))

    def remove_provider(self, name: str) -> bool:
        """Remove a provider by name."""
        for i, registration in enumerate(self.registrations):
            if registration.name.lower() == name.lower():
                self.registrations.pop(i)
                return True
        return False

    def get_available_providers(self) -> list[str]:
        """Get list of providers configured for live data."""
        return [r.name for r in self.registrations if r.provider.is_available()]

    def get_source_priority(self, source: str) -> int:
        for registration in self.registrations:
            if registration.name == source:
                return registration.priority
        return UNKNOWN_PRIORITY

    def search_jobs(self, criteria: SearchCriteria) -> AggregatedResult:
        """
        Search every registered provider and merge the results.

        Args:
            criteria: Search parameters passed unchanged to each provider

        Returns:
            AggregatedResult with ranked unique postings and one
            SourceResult per registered provider, in registration order
        """
        start = time.perf_counter()
        self.logger.info(
            f"Starting aggregated search for '{criteria.search_query}' "
            f"across {len(self.registrations)} providers"
        )

        source_results = self._search_all(criteria)

        candidates = [
            RankedCandidate(job, result.priority)
            for result in source_results
            if result.success
            for job in result.jobs
        ]
        self.logger.debug(f"Total jobs collected: {len(candidates)}")

        unique = deduplicate(candidates)
        duplicates_removed = len(candidates) - len(unique)
        ranked = [c.posting for c in rank(unique, criteria)]

        jobs_by_source: dict[str, int] = {}
        for job in ranked:
            source = job.source or "Unknown"
            jobs_by_source[source] = jobs_by_source.get(source, 0) + 1

        search_time = time.perf_counter() - start
        failed = [r.source for r in source_results if not r.success]
        self.logger.info(
            f"Found {len(ranked)} unique jobs ({duplicates_removed} duplicates removed) "
            f"in {search_time:.2f}s"
            + (f"; failed providers: {', '.join(failed)}" if failed else "")
        )

        return AggregatedResult(
            jobs=ranked,
            source_results=source_results,
            total_count=len(ranked),
            jobs_by_source=jobs_by_source,
            search_time=search_time,
            duplicates_removed=duplicates_removed,
        )

    def _search_all(self, criteria: SearchCriteria) -> list[SourceResult]:
        """Query all providers in parallel, one SourceResult each."""
        if not self.registrations:
            self.logger.warning("No providers registered")
            return []

        with ThreadPoolExecutor(max_workers=len(self.registrations)) as executor:
            futures = [
                executor.submit(self._search_provider, registration, criteria)
                for registration in self.registrations
            ]
            # Collect in registration order; every future settles before we return
            return [
                self._settle(registration, future)
                for registration, future in zip(self.registrations, futures)
            ]

    def _search_provider(self, registration: ProviderRegistration, criteria: SearchCriteria):
        """Search a single provider, timing the call."""
        started = time.perf_counter()
        jobs = list(registration.provider.search_jobs(criteria))
        elapsed = time.perf_counter() - started
        if not all(isinstance(job, Posting) for job in jobs):
            raise TypeError(f"{registration.name} returned malformed postings")
        self.logger.debug(f"{registration.name}: Found {len(jobs)} jobs in {elapsed:.2f}s")
        return jobs, elapsed

    def _settle(self, registration: ProviderRegistration, future) -> SourceResult:
        try:
            jobs, elapsed = future.result()
        except Exception as e:
            self.logger.error(f"{registration.name} search failed: {e}")
            return SourceResult(
                source=registration.name,
                success=False,
                jobs=[],
                error=str(e) or e.__class__.__name__,
                response_time=0.0,
                priority=registration.priority,
            )

        return SourceResult(
            source=registration.name,
            success=True,
            jobs=jobs,
            response_time=elapsed,
            priority=registration.priority,
        )

    def get_stats(self) -> dict:
        """Get statistics about registered providers."""
        return {
            "total_providers": len(self.registrations),
            "available_providers": len(self.get_available_providers()),
            "providers": {
                r.name: {
                    "priority": r.priority,
                    "available": r.provider.is_available(),
                    "requires_api_key": r.provider.requires_api_key,
                    "sample_fallback": r.provider.sample_fallback,
                }
                for r in self.registrations
            },
        }
