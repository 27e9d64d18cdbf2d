"""
LinkedIn job search integration.

Uses the RapidAPI LinkedIn job search endpoint. The upstream matches
titles as exact phrases, so an empty result is retried with broader
queries before falling back to sample data:

    exact phrase -> broadened (main keyword, no city) -> main keyword -> sample
"""

from dataclasses import replace
from datetime import datetime
from typing import Any, Optional

import requests

from .base import JobSearchProvider, ProviderError
from .sample_jobs import generate_sample_jobs
from job_aggregator.core.models import Posting, SearchCriteria
from job_aggregator.core.normalize import (
    NO_DESCRIPTION,
    NO_URL,
    classify_experience_level,
    clean_description,
    format_posted_date,
    generate_benefits,
    generate_requirements,
)

# Checked in order; the first matching phrase decides the keyword.
MAIN_KEYWORD_RULES = [
    (("software engineer", "software developer"), "Software Engineer"),
    (("data scientist", "data engineer"), "Data Scientist"),
    (("product manager",), "Product Manager"),
    (("account executive", "sales"), "Account Executive"),
    (("marketing manager", "marketing"), "Marketing Manager"),
    (("project manager",), "Project Manager"),
    (("designer", "ux", "ui"), "Designer"),
    (("analyst",), "Analyst"),
    (("consultant",), "Consultant"),
    (("director", "manager"), "Manager"),
]

EMPLOYMENT_TYPES = {
    "FULL_TIME": "Full-time",
    "PART_TIME": "Part-time",
    "CONTRACT": "Contract",
    "INTERNSHIP": "Internship",
}

DEFAULT_COUNTRY = "United States"


def extract_main_keyword(search_query: Optional[str]) -> str:
    """Collapse a compound job title to the keyword the upstream matches best."""
    if not search_query:
        return "Engineer"

    lowered = search_query.lower()
    for phrases, keyword in MAIN_KEYWORD_RULES:
        if any(phrase in lowered for phrase in phrases):
            return keyword

    words = search_query.split()
    if len(words) > 1:
        return f"{words[0]} {words[1]}"
    return search_query


class LinkedInProvider(JobSearchProvider):
    """LinkedIn job search provider."""

    API_HOST = "linkedin-job-search-api.p.rapidapi.com"
    API_URL = f"https://{API_HOST}/active-jb-7d"
    RESULT_LIMIT = 10

    @property
    def name(self) -> str:
        return "LinkedIn"

    @property
    def requires_api_key(self) -> bool:
        return True

    @property
    def sample_fallback(self) -> bool:
        return True

    def search_jobs(self, criteria: SearchCriteria) -> list[Posting]:
        """Search LinkedIn, broadening the query before giving up."""
        if not self.api_key:
            self.logger.info("No LinkedIn API key, returning sample data")
            return self._get_sample_jobs(criteria, "LinkedIn API Not Configured")

        try:
            for attempt in self._query_tiers(criteria):
                jobs = self._search_via_api(attempt)
                if jobs:
                    return jobs
                self.logger.debug(
                    f"No LinkedIn results for '{attempt.search_query}', broadening"
                )
        except ProviderError as e:
            self.logger.warning(f"LinkedIn API quota or access problem, using sample data: {e}")
            return self._get_sample_jobs(criteria, "API Quota Exceeded")
        except (requests.RequestException, ValueError) as e:
            self.logger.warning(f"LinkedIn API failed, using sample data: {e}")
            return self._get_sample_jobs(criteria, "LinkedIn API Unavailable")
        except (AttributeError, TypeError, KeyError) as e:
            self.logger.error(f"Malformed LinkedIn payload, using sample data: {e}")
            return self._get_sample_jobs(criteria, "LinkedIn API Unavailable")

        self.logger.info("LinkedIn returned no results for any query tier")
        return self._get_sample_jobs(criteria, "No LinkedIn Results")

    def _query_tiers(self, criteria: SearchCriteria) -> list[SearchCriteria]:
        keyword = extract_main_keyword(criteria.search_query)
        broadened = replace(
            criteria,
            search_query=keyword,
            city=None,
            country=criteria.country or DEFAULT_COUNTRY,
        )
        keyword_only = replace(criteria, search_query=keyword)
        return [criteria, broadened, keyword_only]

    def _search_via_api(self, criteria: SearchCriteria) -> list[Posting]:
        """
        Run one query against the RapidAPI endpoint.

        Raises:
            ProviderError: the upstream reported a disabled endpoint or quota
            requests.RequestException: network failure or non-2xx status
        """
        params = {
            "limit": str(self.RESULT_LIMIT),
            "offset": "0",
            "description_type": "text",
        }
        if criteria.search_query:
            params["title_filter"] = f'"{criteria.search_query}"'
        location = criteria.location_text()
        if location:
            params["location_filter"] = f'"{location}"'

        headers = {
            "x-rapidapi-host": self.API_HOST,
            "x-rapidapi-key": self.api_key,
        }

        data = self._get_json(self.API_URL, params, headers)

        if isinstance(data, dict):
            message = str(data.get("message") or "")
            if "disabled" in message:
                raise ProviderError("RapidAPI endpoint is disabled for this subscription")
            if "exceeded" in message and "quota" in message:
                raise ProviderError("RapidAPI monthly quota exceeded")
            items = data.get("jobs") or data.get("data") or data.get("results") or []
        else:
            items = data or []

        now = datetime.now()
        return [
            self._parse_api_job(item, index, now)
            for index, item in enumerate(items)
            if isinstance(item, dict)
        ]

    def _parse_api_job(self, data: dict, index: int, now: datetime) -> Posting:
        """Parse LinkedIn API job data into a Posting."""
        title = data.get("title") or "Unknown Title"
        company = data.get("organization") or "Unknown Company"

        return Posting(
            id=f"linkedin_{data.get('id') or index}",
            title=title,
            company=company,
            location=self._parse_location(data),
            salary=data.get("salary_raw") or None,
            description=clean_description(data.get("description_text") or NO_DESCRIPTION),
            url=data.get("url") or data.get("external_apply_url") or NO_URL,
            posted_date=(
                format_posted_date(data["date_posted"], now)
                if data.get("date_posted") else "Unknown Date"
            ),
            source=self.name,
            job_type=self._parse_employment_type(data.get("employment_type")),
            experience_level=classify_experience_level(title),
            requirements=generate_requirements(title, company),
            benefits=generate_benefits(company),
            remote=bool(data.get("remote_derived")),
        )

    def _parse_location(self, data: dict) -> str:
        raw = data.get("locations_raw")
        if isinstance(raw, list) and raw and isinstance(raw[0], dict):
            address = raw[0].get("address")
            if isinstance(address, str) and address.strip():
                return address.strip()
            if isinstance(address, dict):
                parts = [
                    str(address[key])
                    for key in ("addressLocality", "addressRegion", "addressCountry")
                    if address.get(key)
                ]
                if parts:
                    return ", ".join(parts)

        derived = data.get("locations_derived")
        if isinstance(derived, list) and derived:
            return str(derived[0])
        if isinstance(derived, str) and derived:
            return derived

        return "Unknown Location"

    def _parse_employment_type(self, value: Any) -> str:
        if isinstance(value, list) and value:
            return EMPLOYMENT_TYPES.get(str(value[0]), "Full-time")
        if isinstance(value, str):
            return EMPLOYMENT_TYPES.get(value, "Full-time")
        return "Full-time"

    def _get_sample_jobs(self, criteria: SearchCriteria, reason: str) -> list[Posting]:
        """Return sample LinkedIn-style jobs when live data is unavailable."""
        query = criteria.search_query or "Software"
        titles = [
            criteria.search_query or "Software Engineer",
            f"{query} Developer",
            f"Senior {query} Engineer",
            f"{query} Architect",
            f"Lead {query} Engineer",
            f"Principal {query} Engineer",
        ]
        return generate_sample_jobs(criteria, "linkedin", reason, titles=titles)
