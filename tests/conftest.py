"""Shared test fixtures for the job aggregator test suite."""

import pytest

from job_aggregator.core.models import Posting
from job_aggregator.integrations.base import JobSearchProvider


class StubProvider(JobSearchProvider):
    """Provider returning a fixed list of postings."""

    def __init__(self, name, jobs=None, requires_api_key=False):
        super().__init__()
        self._name = name
        self._jobs = list(jobs or [])
        self._requires_api_key = requires_api_key
        self.calls = []

    @property
    def name(self):
        return self._name

    @property
    def requires_api_key(self):
        return self._requires_api_key

    def search_jobs(self, criteria):
        self.calls.append(criteria)
        return list(self._jobs)


class FailingProvider(StubProvider):
    """Provider that raises instead of returning postings."""

    def __init__(self, name, error=None):
        super().__init__(name)
        self.error = error or RuntimeError("upstream exploded")

    def search_jobs(self, criteria):
        self.calls.append(criteria)
        raise self.error


class FakeClock:
    """Manually advanced clock; sleep() advances time instead of blocking."""

    def __init__(self, start=1_700_000_000.0):
        self.time = start
        self.sleeps = []

    def now(self):
        return self.time

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.time += seconds

    def advance(self, seconds):
        self.time += seconds


@pytest.fixture
def make_posting():
    """Factory fixture for creating Posting instances with defaults."""

    def _make(**overrides):
        defaults = {
            "id": "test_1",
            "title": "Software Engineer",
            "company": "Acme",
            "location": "Austin, TX",
            "description": "Build things.",
            "url": "https://example.com/jobs/1",
            "source": "Stub",
        }
        defaults.update(overrides)
        return Posting(**defaults)

    return _make


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def no_api_keys(monkeypatch):
    """Keep real API keys in the environment out of every test."""
    for var in (
        "SERPAPI_KEY",
        "RAPIDAPI_LINKEDIN_KEY",
        "RAPIDAPI_LINKEDIN_KEY_2",
        "RAPIDAPI_LINKEDIN_KEY_3",
    ):
        monkeypatch.delenv(var, raising=False)
