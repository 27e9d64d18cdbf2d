"""
Deduplication and relevance ranking for aggregated postings.

Scoring against the search criteria:
- Query match: +10 when the query is a substring of the title
- City match: +5, country match: +3 (substring of location)
- Remote: +5 when remote was requested and the posting is remote
- Salary: +3 when the parsed salary meets the requested minimum
- Source: +(10 - priority), favoring higher-priority providers
"""

from dataclasses import dataclass
import re

from .models import Posting, Salary, SearchCriteria

UNKNOWN_PRIORITY = 999

_PUNCTUATION = re.compile(r"[^\w\s]")
_THOUSANDS = re.compile(r"(\d+)k", re.IGNORECASE)


@dataclass(frozen=True)
class RankedCandidate:
    """A posting paired with the priority of the provider that returned it."""
    posting: Posting
    priority: int = UNKNOWN_PRIORITY


def _normalize(text: str) -> str:
    return _PUNCTUATION.sub("", (text or "").lower()).strip()


def dedup_key(posting: Posting) -> str:
    """Normalized title + company identifying semantically equal postings."""
    return f"{_normalize(posting.title)}-{_normalize(posting.company)}"


def deduplicate(candidates: list[RankedCandidate]) -> list[RankedCandidate]:
    """
    Keep one candidate per dedup key.

    The first candidate seen for a key holds its slot; a later one
    replaces it only when its priority is strictly lower (higher
    precedence).
    """
    slots: dict[str, int] = {}
    unique: list[RankedCandidate] = []

    for candidate in candidates:
        key = dedup_key(candidate.posting)
        index = slots.get(key)
        if index is None:
            slots[key] = len(unique)
            unique.append(candidate)
        elif candidate.priority < unique[index].priority:
            unique[index] = candidate

    return unique


def extract_salary_value(salary: Salary) -> int:
    """
    Parse a comparable annual salary.

    "120k - 160k" -> 120000; {"minValue": 90000} -> 90000;
    {"value": {"maxValue": 150000}} -> 150000; anything else -> 0.
    """
    if not salary:
        return 0

    if isinstance(salary, str):
        match = _THOUSANDS.search(salary)
        return int(match.group(1)) * 1000 if match else 0

    if isinstance(salary, dict):
        value = salary.get("value", salary)
        if not isinstance(value, dict):
            return 0
        amount = value.get("minValue") or value.get("maxValue") or 0
        try:
            return int(amount)
        except (TypeError, ValueError):
            return 0

    return 0


def relevance_score(candidate: RankedCandidate, criteria: SearchCriteria) -> int:
    """Additive relevance of one posting against the search criteria."""
    posting = candidate.posting
    score = 0

    if criteria.search_query:
        if criteria.search_query.lower() in posting.title.lower():
            score += 10

    location = posting.location.lower()
    if criteria.city and criteria.city.lower() in location:
        score += 5
    if criteria.country and criteria.country.lower() in location:
        score += 3

    if criteria.remote and posting.remote:
        score += 5

    if criteria.salary_min:
        if extract_salary_value(posting.salary) >= criteria.salary_min:
            score += 3

    score += 10 - candidate.priority
    return score


def rank(candidates: list[RankedCandidate], criteria: SearchCriteria) -> list[RankedCandidate]:
    """Sort candidates by relevance, highest first; ties keep input order."""
    return sorted(
        candidates,
        key=lambda c: relevance_score(c, criteria),
        reverse=True,
    )
