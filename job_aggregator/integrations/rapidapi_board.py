"""
Shared provider for job boards exposed through RapidAPI.

Indeed, Glassdoor and ZipRecruiter differ only in host, path and query
parameter names; the payload is normalized through one alias table.
"""

from typing import Any

import requests

from .base import JobSearchProvider
from job_aggregator.core.models import Posting, SearchCriteria
from job_aggregator.core.normalize import (
    COMPANY_NOT_AVAILABLE,
    DEFAULT_JOB_TYPE,
    LOCATION_NOT_AVAILABLE,
    NO_URL,
    POSTED_RECENTLY,
    TITLE_NOT_AVAILABLE,
    FieldRule,
    apply_rules,
    as_bool,
    as_string_list,
    classify_experience_level,
    clean_description,
    generate_benefits,
    generate_requirements,
)

JOB_FIELD_RULES = {
    "id": FieldRule(("jobId", "id")),
    "title": FieldRule(("title", "jobTitle"), TITLE_NOT_AVAILABLE),
    "company": FieldRule(("company", "companyName"), COMPANY_NOT_AVAILABLE),
    "location": FieldRule(("location", "jobLocation"), LOCATION_NOT_AVAILABLE),
    "description": FieldRule(("description", "jobDescription", "summary")),
    "salary": FieldRule(("salary", "salaryRange", "compensation")),
    "job_type": FieldRule(("jobType", "employmentType"), DEFAULT_JOB_TYPE),
    "posted_date": FieldRule(("postedDate", "datePosted", "createdAt"), POSTED_RECENTLY),
    "url": FieldRule(("applyUrl", "jobUrl", "url"), NO_URL),
    "requirements": FieldRule(("requirements", "qualifications")),
    "benefits": FieldRule(("benefits",)),
    "remote": FieldRule(("remote", "workFromHome"), False),
}

DEFAULT_QUERY = "software engineer"
DEFAULT_LOCATION = "United States"


class RapidApiBoardProvider(JobSearchProvider):
    """Job board reached through a RapidAPI proxy."""

    HOST = ""
    PATH = "/search"
    QUERY_PARAM = "query"
    LOCATION_PARAM = "location"
    ID_PREFIX = ""
    RESULT_LIMIT = 20

    @property
    def requires_api_key(self) -> bool:
        return True

    def search_jobs(self, criteria: SearchCriteria) -> list[Posting]:
        """Search the board; any upstream failure yields an empty list."""
        if not self.api_key:
            self.logger.warning(f"No RapidAPI key configured for {self.name}, skipping")
            return []

        params = {
            self.QUERY_PARAM: criteria.search_query or DEFAULT_QUERY,
            self.LOCATION_PARAM: criteria.location_text() or DEFAULT_LOCATION,
            "limit": str(self.RESULT_LIMIT),
        }
        headers = {
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.HOST,
        }

        try:
            self.logger.debug(f"Searching {self.name} jobs...")
            data = self._get_json(f"https://{self.HOST}{self.PATH}", params, headers)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            self.logger.error(f"{self.name} API error: {status}")
            return []
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"{self.name} API error: {e}")
            return []

        return [
            self._parse_job(item, index)
            for index, item in enumerate(self._extract_items(data))
            if isinstance(item, dict)
        ]

    def _extract_items(self, data: Any) -> list:
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            for key in ("jobs", "data", "results"):
                items = data.get(key)
                if isinstance(items, list):
                    return items
        return []

    def _parse_job(self, item: dict, index: int) -> Posting:
        """Map one upstream job onto the canonical Posting shape."""
        fields = apply_rules(item, JOB_FIELD_RULES)
        title = str(fields["title"])
        company = str(fields["company"])
        job_id = fields["id"] if fields["id"] is not None else index
        salary = fields["salary"]
        if salary is not None and not isinstance(salary, (str, dict)):
            salary = str(salary)

        return Posting(
            id=f"{self.ID_PREFIX}_{job_id}",
            title=title,
            company=company,
            location=str(fields["location"]),
            salary=salary,
            description=clean_description(fields["description"]),
            url=str(fields["url"]),
            posted_date=str(fields["posted_date"]),
            source=self.name,
            job_type=str(fields["job_type"]),
            experience_level=classify_experience_level(title),
            requirements=as_string_list(fields["requirements"])
            or generate_requirements(title, company),
            benefits=as_string_list(fields["benefits"]) or generate_benefits(company),
            remote=as_bool(fields["remote"]),
        )
