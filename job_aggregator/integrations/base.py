"""
Base class for job search providers.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
import logging

import requests

from job_aggregator.core.models import Posting, SearchCriteria


class ProviderError(Exception):
    """An upstream reported a failure inside an otherwise valid response."""


class JobSearchProvider(ABC):
    """Abstract base class for job search providers."""

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name, also used as the source label of its postings."""
        pass

    @property
    @abstractmethod
    def requires_api_key(self) -> bool:
        """Whether this provider needs an API key for live data."""
        pass

    @abstractmethod
    def search_jobs(self, criteria: SearchCriteria) -> list[Posting]:
        """
        Search for jobs matching the criteria.

        Upstream failures are absorbed here: implementations log them and
        return an empty list or tagged sample postings instead of raising.

        Args:
            criteria: Search parameters shared by every provider

        Returns:
            List of normalized Posting objects
        """
        pass

    @property
    def sample_fallback(self) -> bool:
        """Whether the provider returns sample postings when it has no live data."""
        return False

    def is_available(self) -> bool:
        """Check if the provider is configured for live upstream data."""
        if self.requires_api_key and not self.api_key:
            return False
        return True

    def _get_json(
        self,
        url: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        """
        GET a JSON document.

        Raises:
            requests.RequestException: network failure or non-2xx status
            ValueError: the body is not valid JSON
        """
        response = self.session.get(
            url,
            params=params,
            headers=headers,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()
