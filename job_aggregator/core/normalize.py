"""
Normalization helpers shared by the provider adapters.

Upstream payloads name the same logical field in several ways. Each
logical field is described by a FieldRule listing the aliases in
precedence order, and apply_rules() maps a payload onto those fields.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional
import math

from bs4 import BeautifulSoup

from .models import SAMPLE_DATA_MARKER

TITLE_NOT_AVAILABLE = "Job Title Not Available"
COMPANY_NOT_AVAILABLE = "Company Not Available"
LOCATION_NOT_AVAILABLE = "Location Not Available"
NO_DESCRIPTION = "No description available"
NO_URL = "#"
POSTED_RECENTLY = "Recently"
DEFAULT_JOB_TYPE = "Full-time"

EXPERIENCE_LEVELS = [
    ("senior", "Senior"),
    ("lead", "Lead"),
    ("principal", "Principal"),
    ("junior", "Junior"),
]


@dataclass(frozen=True)
class FieldRule:
    """Try each alias in order, else fall back to the default."""
    aliases: tuple[str, ...]
    default: Any = None


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)) and len(value) == 0:
        return False
    return True


def first_present(payload: dict, aliases, default: Any = None) -> Any:
    """Return the first alias of payload holding a non-empty value."""
    for alias in aliases:
        value = payload.get(alias)
        if _is_present(value):
            return value
    return default


def apply_rules(payload: dict, rules: dict[str, FieldRule]) -> dict[str, Any]:
    """Map an upstream payload onto logical fields using ordered alias rules."""
    return {
        name: first_present(payload, rule.aliases, rule.default)
        for name, rule in rules.items()
    }


def classify_experience_level(title: str) -> str:
    """Classify seniority from title keywords."""
    title_lower = (title or "").lower()
    for keyword, level in EXPERIENCE_LEVELS:
        if keyword in title_lower:
            return level
    return "Mid-level"


def generate_requirements(title: str, company: str) -> list[str]:
    """Build a plausible requirement list from title keywords."""
    title_lower = (title or "").lower()
    requirements = [
        "Bachelor's degree in Computer Science or related field",
        "Strong problem-solving skills",
        "Excellent communication skills",
    ]

    if "senior" in title_lower:
        requirements.append("5+ years of relevant experience")
        requirements.append("Leadership experience")
    elif "junior" in title_lower:
        requirements.append("1-2 years of experience")
        requirements.append("Eagerness to learn")
    else:
        requirements.append("3+ years of relevant experience")

    if "frontend" in title_lower:
        requirements.append("Proficiency in React, JavaScript, HTML, CSS")
        requirements.append("Experience with modern frontend frameworks")
    elif "backend" in title_lower:
        requirements.append("Experience with server-side technologies")
        requirements.append("Database design and optimization skills")
    elif "full stack" in title_lower:
        requirements.append("Full-stack development experience")
        requirements.append("Knowledge of both frontend and backend technologies")

    return requirements


def generate_benefits(company: str) -> list[str]:
    """Build a plausible benefit list from company keywords."""
    company_lower = (company or "").lower()
    benefits = [
        "Health insurance",
        "Dental insurance",
        "Vision insurance",
        "401k matching",
        "Paid time off",
    ]

    if "tech" in company_lower or "startup" in company_lower:
        benefits.extend([
            "Stock options",
            "Flexible work hours",
            "Remote work options",
            "Professional development budget",
        ])

    return benefits


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_posted_date(value: Any, now: Optional[datetime] = None) -> str:
    """Convert an absolute posting date into a relative-age string."""
    posted = _parse_date(value)
    if posted is None:
        return POSTED_RECENTLY

    today = (now or datetime.now()).date()
    days = max(1, abs((today - posted).days))

    if days == 1:
        return "1 day ago"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        weeks = math.ceil(days / 7)
        return f"{weeks} week{'s' if weeks > 1 else ''} ago"
    months = math.ceil(days / 30)
    return f"{months} month{'s' if months > 1 else ''} ago"


def clean_description(text: Any) -> str:
    """Strip HTML markup from a description, keeping the visible text."""
    if not _is_present(text):
        return NO_DESCRIPTION
    text = str(text)
    if "<" not in text:
        return text.strip()
    cleaned = BeautifulSoup(text, "html.parser").get_text(" ", strip=True)
    return cleaned or NO_DESCRIPTION


def as_string_list(value: Any) -> list[str]:
    """Coerce a string-or-list upstream field to a list of strings."""
    if not _is_present(value):
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if _is_present(item)]
    return [str(value)]


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "remote")
    return bool(value)


def sample_source(reason: str) -> str:
    """Source label carried by synthetic postings."""
    return f"Sample Data ({reason})"


def sample_description(text: str) -> str:
    """Prefix a synthetic description with the sample-data marker."""
    return f"{SAMPLE_DATA_MARKER} {text}"
