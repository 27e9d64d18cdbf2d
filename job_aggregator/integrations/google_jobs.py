"""
Google Jobs integration via SerpApi's google_jobs engine.

Falls back to sample data when no SerpApi key is configured, when the
request fails, or when Google returns no listings.
"""

from typing import Optional
import re

import requests

from .base import JobSearchProvider, ProviderError
from .sample_jobs import generate_sample_jobs, title_variations
from job_aggregator.core.models import Posting, SearchCriteria
from job_aggregator.core.normalize import (
    COMPANY_NOT_AVAILABLE,
    LOCATION_NOT_AVAILABLE,
    NO_URL,
    TITLE_NOT_AVAILABLE,
    as_string_list,
    classify_experience_level,
    clean_description,
)

# posted_within (days) -> SerpApi date_posted
DATE_POSTED = {
    1: "today",
    3: "3days",
    7: "week",
    30: "month",
}

NO_SALARY = "Salary not specified"
HOURS_PER_YEAR = 2080


def annualized_salaries(salary_text: str) -> list[int]:
    """
    Annual figures mentioned in a salary string.

    "120K–150K a year" -> [120000, 150000]; "45 an hour" -> [93600].
    """
    text = (salary_text or "").lower().replace(",", "")
    hourly = "hour" in text or "/hr" in text
    values = []
    for number, suffix in re.findall(r"(\d+(?:\.\d+)?)\s*(k?)", text):
        amount = float(number)
        if suffix:
            amount *= 1000
        elif hourly:
            amount *= HOURS_PER_YEAR
        values.append(int(amount))
    return values


def meets_salary_filter(
    posting: Posting,
    salary_min: Optional[int],
    salary_max: Optional[int] = None,
) -> bool:
    """Whether any salary figure falls in range; postings without figures pass."""
    if not salary_min and not salary_max:
        return True
    if not isinstance(posting.salary, str):
        return True

    values = annualized_salaries(posting.salary)
    if not values:
        return True

    for value in values:
        if salary_min and value < salary_min:
            continue
        if salary_max and value > salary_max:
            continue
        return True
    return False


class GoogleJobsProvider(JobSearchProvider):
    """Google Jobs search provider backed by SerpApi."""

    API_URL = "https://serpapi.com/search"
    RESULT_COUNT = 10

    @property
    def name(self) -> str:
        return "Google Jobs"

    @property
    def requires_api_key(self) -> bool:
        return True

    @property
    def sample_fallback(self) -> bool:
        return True

    def search_jobs(self, criteria: SearchCriteria) -> list[Posting]:
        """Search Google Jobs through SerpApi."""
        if not self.api_key:
            self.logger.info("SerpApi key not configured, using sample data")
            return self._get_sample_jobs(criteria, "SerpApi Not Configured")

        try:
            data = self._get_json(self.API_URL, self._build_params(criteria))
            if not isinstance(data, dict):
                raise ProviderError("Unexpected SerpApi response shape")
            if data.get("error"):
                raise ProviderError(f"SerpApi error: {data['error']}")
        except (requests.RequestException, ValueError, ProviderError) as e:
            self.logger.error(f"Google Jobs search failed, using sample data: {e}")
            return self._get_sample_jobs(criteria, "Google Jobs Unavailable")

        results = data.get("jobs_results") or []
        if not results:
            self.logger.info("No jobs found via SerpApi")
            return self._get_sample_jobs(criteria, "No Google Jobs Results")

        self.logger.debug(f"Found {len(results)} jobs via SerpApi")
        try:
            if not isinstance(results, list):
                raise ProviderError("jobs_results is not a list")
            jobs = [
                self._parse_result(result, index)
                for index, result in enumerate(results)
                if isinstance(result, dict)
            ]
        except (AttributeError, TypeError, KeyError, ProviderError) as e:
            self.logger.error(f"Malformed SerpApi payload, using sample data: {e}")
            return self._get_sample_jobs(criteria, "Google Jobs Unavailable")

        if criteria.salary_min:
            jobs = [
                job for job in jobs
                if meets_salary_filter(job, criteria.salary_min, criteria.salary_max)
            ]

        return jobs

    def _build_query(self, criteria: SearchCriteria) -> str:
        query = criteria.search_query or "Software Engineer"
        location = criteria.location_text()
        if location:
            query += f" jobs in {location}"
        if criteria.remote:
            query += " remote"
        return query

    def _build_params(self, criteria: SearchCriteria) -> dict:
        params = {
            "engine": "google_jobs",
            "q": self._build_query(criteria),
            "api_key": self.api_key,
            "num": str(self.RESULT_COUNT),
            "hl": "en",
            "gl": "us",
        }
        if criteria.job_type:
            params["employment_type"] = criteria.job_type
        if criteria.posted_within in DATE_POSTED:
            params["date_posted"] = DATE_POSTED[criteria.posted_within]
        return params

    def _parse_result(self, result: dict, index: int) -> Posting:
        """Convert one SerpApi jobs_results entry into a Posting."""
        title = str(result.get("title") or TITLE_NOT_AVAILABLE)
        detected = result.get("detected_extensions")
        if not isinstance(detected, dict):
            detected = {}

        salary = NO_SALARY
        for extension in as_string_list(result.get("extensions")):
            if "$" in extension or "k" in extension.lower() or "hour" in extension:
                salary = extension
                break

        highlights = result.get("job_highlights")
        if not isinstance(highlights, list):
            highlights = []
        apply_options = result.get("apply_options")
        first_option = apply_options[0] if isinstance(apply_options, list) and apply_options else None
        url = (
            (first_option.get("link") if isinstance(first_option, dict) else None)
            or result.get("share_link")
            or NO_URL
        )

        return Posting(
            id=f"google_jobs_{result.get('job_id') or index + 1}",
            title=title,
            company=result.get("company_name") or COMPANY_NOT_AVAILABLE,
            location=result.get("location") or LOCATION_NOT_AVAILABLE,
            salary=salary,
            description=clean_description(result.get("description")),
            url=url,
            posted_date=detected.get("posted_at") or "Recently posted",
            source=self.name,
            job_type=detected.get("schedule_type") or "Full-time",
            experience_level=classify_experience_level(title),
            requirements=self._highlight_items(highlights, "qualification", "requirement"),
            benefits=self._highlight_items(highlights, "benefit"),
            remote=bool(detected.get("work_from_home")),
        )

    def _highlight_items(self, highlights: list, *keywords: str) -> list[str]:
        for highlight in highlights:
            if not isinstance(highlight, dict):
                continue
            heading = str(highlight.get("title", "")).lower()
            if any(keyword in heading for keyword in keywords):
                return as_string_list(highlight.get("items"))
        return []

    def _get_sample_jobs(self, criteria: SearchCriteria, reason: str) -> list[Posting]:
        titles = title_variations(criteria.search_query)
        return generate_sample_jobs(criteria, "google_jobs", reason, titles=titles)
