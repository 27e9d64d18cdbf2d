"""
Core data models for the job aggregation engine.
"""

from dataclasses import asdict, dataclass, field
from typing import Optional, Union
import json

SAMPLE_DATA_MARKER = "[SAMPLE DATA]"
TEST_PROFILE_MARKER = "[TEST PROFILE]"
TEST_TITLE_MARKER = "[TEST]"

Salary = Union[str, dict, None]


@dataclass(frozen=True)
class SearchCriteria:
    """Parameters of a single aggregated job search."""
    search_query: str = ""
    city: Optional[str] = None
    country: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    job_type: Optional[str] = None
    remote: bool = False
    posted_within: Optional[int] = None  # days
    job_description: Optional[str] = None

    def __post_init__(self):
        if self.posted_within is not None and self.posted_within < 0:
            raise ValueError(f"posted_within must be >= 0, got {self.posted_within}")
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError(
                f"salary_min ({self.salary_min}) exceeds salary_max ({self.salary_max})"
            )

    def location_text(self) -> Optional[str]:
        """Render city/country as a single location string."""
        if self.city and self.country:
            return f"{self.city}, {self.country}"
        return self.city or self.country or None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Posting:
    """A single normalized job listing, whatever provider produced it."""
    id: str
    title: str
    company: str
    location: str
    description: str
    url: str
    source: str
    salary: Salary = None
    posted_date: str = "Recently"
    job_type: str = "Full-time"
    experience_level: str = "Mid-level"
    requirements: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    remote: bool = False

    @property
    def is_sample(self) -> bool:
        return (
            SAMPLE_DATA_MARKER in self.description
            or self.source.startswith("Sample Data")
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "salary": self.salary,
            "description": self.description,
            "url": self.url,
            "posted_date": self.posted_date,
            "source": self.source,
            "job_type": self.job_type,
            "experience_level": self.experience_level,
            "requirements": list(self.requirements),
            "benefits": list(self.benefits),
            "remote": self.remote,
        }


@dataclass(frozen=True)
class SourceResult:
    """Outcome of querying one provider during one aggregated search."""
    source: str
    success: bool
    jobs: list[Posting] = field(default_factory=list)
    error: Optional[str] = None
    response_time: float = 0.0  # seconds
    priority: int = 999

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "success": self.success,
            "job_count": len(self.jobs),
            "error": self.error,
            "response_time": round(self.response_time, 3),
            "priority": self.priority,
        }


@dataclass(frozen=True)
class AggregatedResult:
    """Ranked, deduplicated output of an aggregated search."""
    jobs: list[Posting]
    source_results: list[SourceResult]
    total_count: int
    jobs_by_source: dict[str, int]
    search_time: float  # seconds
    duplicates_removed: int

    @property
    def has_sample_data(self) -> bool:
        return any(job.is_sample for job in self.jobs)

    @property
    def successful_sources(self) -> list[str]:
        return [r.source for r in self.source_results if r.success]

    @property
    def failed_sources(self) -> list[str]:
        return [r.source for r in self.source_results if not r.success]

    def to_dict(self) -> dict:
        return {
            "jobs": [job.to_dict() for job in self.jobs],
            "source_results": [r.to_dict() for r in self.source_results],
            "total_count": self.total_count,
            "jobs_by_source": dict(self.jobs_by_source),
            "search_time": round(self.search_time, 3),
            "duplicates_removed": self.duplicates_removed,
            "has_sample_data": self.has_sample_data,
        }


@dataclass
class Profile:
    """A person returned by the external profile lookup."""
    id: str
    first_name: str
    last_name: str
    headline: str
    location: str
    profile_picture_url: Optional[str] = None
    company_name: Optional[str] = None
    job_title: Optional[str] = None
    connection_degree: str = "potential"  # 1st, 2nd, 3rd, potential
    mutual_connections: int = 0
    last_interaction: Optional[str] = None  # ISO date
    search_criteria: str = "employee"  # recruiter, hiring_manager, employee
    profile_url: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_sample(self) -> bool:
        return TEST_PROFILE_MARKER in self.headline

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "headline": self.headline,
            "location": self.location,
            "profile_picture_url": self.profile_picture_url,
            "company_name": self.company_name,
            "job_title": self.job_title,
            "connection_degree": self.connection_degree,
            "mutual_connections": self.mutual_connections,
            "last_interaction": self.last_interaction,
            "search_criteria": self.search_criteria,
            "profile_url": self.profile_url,
        }


@dataclass(frozen=True)
class ProfileSearchParams:
    """Parameters for a profile lookup."""
    query: str
    company: Optional[str] = None
    location: Optional[str] = None
    job_title: Optional[str] = None
    connection_type: Optional[str] = None  # recruiter, hiring_manager, employee, all
    industry: Optional[str] = None
    experience_level: Optional[str] = None  # entry, mid, senior, executive
    school: Optional[str] = None
    skills: tuple[str, ...] = ()
    current_company: Optional[str] = None
    past_company: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    sort_by: Optional[str] = None  # relevance, recent, connections

    def cache_key(self) -> str:
        data = asdict(self)
        data["skills"] = list(self.skills)
        return json.dumps(data, sort_keys=True)
