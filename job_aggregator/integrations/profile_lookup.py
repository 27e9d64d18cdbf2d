"""
Profile lookup client for the RapidAPI LinkedIn people-search endpoint.

Every lookup goes through the same path:

    cache -> (no keys: sample) -> rotate at key ceiling -> throttle
          -> upstream call -> normalize, cache, count

Any upstream failure degrades to curated sample profiles tagged
"[TEST PROFILE]". A 403 also rotates to the next API key.
"""

from dataclasses import replace
from datetime import date, timedelta
from typing import Any, Callable, Optional
import logging
import os
import re
import uuid

import requests

from .lookup_state import KeyPool, RequestThrottle, ResponseCache, SystemClock
from .sample_profiles import profiles_for_company
from job_aggregator.core.models import (
    TEST_PROFILE_MARKER,
    TEST_TITLE_MARKER,
    Profile,
    ProfileSearchParams,
)
from job_aggregator.core.normalize import FieldRule, apply_rules

PROFILE_FIELD_RULES = {
    "id": FieldRule(("id", "public_id", "linkedin_id")),
    "public_id": FieldRule(("public_id", "linkedin_id")),
    "first_name": FieldRule(("first_name", "firstName")),
    "last_name": FieldRule(("last_name", "lastName")),
    "name": FieldRule(("name", "full_name")),
    "headline": FieldRule(("headline", "summary", "title"), "Professional"),
    "location": FieldRule(("location", "geo_location", "address"), "Location not specified"),
    "profile_picture_url": FieldRule(("profile_picture", "avatar_url", "image_url")),
    "company_name": FieldRule(("company_name", "current_company", "company", "organization")),
    "job_title": FieldRule(("job_title", "current_position", "title", "position")),
    "mutual_connections": FieldRule(("mutual_connections", "mutual_connects"), 0),
    "last_interaction": FieldRule(("last_interaction",)),
    "search_criteria": FieldRule(("search_criteria", "search_type"), "employee"),
    "profile_url": FieldRule(("profile_url", "linkedin_url", "url")),
}

CONNECTION_DEGREES = {1: "1st", 2: "2nd", 3: "3rd"}

# Title keywords per requested level; "mid" and "senior" share keywords.
EXPERIENCE_KEYWORDS = {
    "entry": ("junior", "entry", "associate", "intern"),
    "mid": ("senior", "lead", "specialist", "analyst"),
    "senior": ("senior", "lead", "principal", "staff"),
    "executive": ("director", "vp", "vice president", "ceo", "cto", "cfo"),
}

NO_INTERACTION = "1970-01-01"


def determine_connection_degree(payload: dict) -> str:
    if payload.get("is_connection"):
        return "1st"
    degree = payload.get("connection_degree")
    try:
        return CONNECTION_DEGREES.get(int(degree), "potential")
    except (TypeError, ValueError):
        return "potential"


def filter_by_experience_level(profiles: list[Profile], level: Optional[str]) -> list[Profile]:
    """Keep profiles whose title (or headline) carries a keyword for the level."""
    keywords = EXPERIENCE_KEYWORDS.get(level or "")
    if not keywords:
        return list(profiles)

    def matches(profile: Profile) -> bool:
        title = (profile.job_title or profile.headline or "").lower()
        return any(keyword in title for keyword in keywords)

    return [p for p in profiles if matches(p)]


def sort_profiles(profiles: list[Profile], sort_by: Optional[str]) -> list[Profile]:
    """
    Order profiles for display.

    relevance (default): mutual connections desc, then full name
    recent: last interaction desc, missing dates last
    connections: mutual connections desc
    """
    if sort_by == "recent":
        return sorted(
            profiles,
            key=lambda p: p.last_interaction or NO_INTERACTION,
            reverse=True,
        )
    if sort_by == "connections":
        return sorted(profiles, key=lambda p: p.mutual_connections, reverse=True)
    return sorted(profiles, key=lambda p: (-p.mutual_connections, p.full_name.casefold()))


def refine_profiles(profiles: list[Profile], params: ProfileSearchParams) -> list[Profile]:
    """Apply the advanced-search experience filter, sort order and limit."""
    refined = filter_by_experience_level(profiles, params.experience_level)
    if params.sort_by:
        refined = sort_profiles(refined, params.sort_by)
    if params.limit:
        refined = refined[:params.limit]
    return refined


class ProfileLookupClient:
    """Rate-limited, key-rotating, cached people search with sample fallback."""

    API_HOST = "fresh-linkedin-scraper-api.p.rapidapi.com"
    BASE_URL = f"https://{API_HOST}/api/v1"
    KEY_ENV_VARS = (
        "RAPIDAPI_LINKEDIN_KEY",
        "RAPIDAPI_LINKEDIN_KEY_2",
        "RAPIDAPI_LINKEDIN_KEY_3",
    )

    def __init__(
        self,
        api_keys: Optional[list[str]] = None,
        key_pool: Optional[KeyPool] = None,
        throttle: Optional[RequestThrottle] = None,
        cache: Optional[ResponseCache] = None,
        clock=None,
        session: Optional[requests.Session] = None,
        min_request_interval: float = 30.0,
        max_requests_per_key: int = 100,
        cache_expiry: float = 3600.0,
        timeout: float = 30,
    ):
        """
        Initialize the lookup client.

        Args:
            api_keys: RapidAPI keys in rotation order; read from
                      RAPIDAPI_LINKEDIN_KEY[_2|_3] when omitted
            key_pool, throttle, cache: injected state, built from the
                      tunables below when omitted
            clock: time source shared by the throttle, cache and sample
                   dates (SystemClock by default)
        """
        self.clock = clock or SystemClock()
        if api_keys is None:
            api_keys = [os.environ.get(var) for var in self.KEY_ENV_VARS]
        self.key_pool = key_pool or KeyPool(api_keys, max_requests_per_key)
        self.throttle = throttle or RequestThrottle(min_request_interval, self.clock)
        self.cache = cache or ResponseCache(cache_expiry, self.clock)
        self.session = session or requests.Session()
        self.timeout = timeout
        self.logger = logging.getLogger(self.__class__.__name__)

        if self.key_pool.is_empty:
            self.logger.warning("No RapidAPI LinkedIn keys configured, lookups return sample data")
        else:
            self.logger.info(f"Profile lookup initialized with {len(self.key_pool)} API key(s)")

    def search(self, params: ProfileSearchParams) -> list[Profile]:
        """Basic people search by name, company and location."""
        query = {
            "name": params.query,
            "company": params.company,
            "location": params.location,
            "page": 1,
        }
        # connection_type is not sent upstream, so it must not split the cache
        return self._lookup("search", replace(params, connection_type=None), query)

    def advanced_search(self, params: ProfileSearchParams) -> list[Profile]:
        """
        People search with upstream filters, then client-side experience
        filtering, sorting and limiting. Sample fallback goes through the
        same refinement.
        """
        query = {
            "name": params.query,
            "company": params.company,
            "location": params.location,
            "job_title": params.job_title,
            "page": params.page or 1,
        }
        if params.industry:
            query["industry"] = params.industry
        if params.school:
            query["school"] = params.school
        if params.current_company:
            query["current_company"] = params.current_company
        if params.past_company:
            query["past_company"] = params.past_company
        if params.skills:
            query["skills"] = ",".join(params.skills)

        return self._lookup(
            "advanced",
            params,
            query,
            refine=lambda profiles: refine_profiles(profiles, params),
        )

    def search_company_employees(self, company: str, search_type: str = "employee") -> list[Profile]:
        """Find people at a company, optionally narrowed to a role category."""
        return self.search(
            ProfileSearchParams(query=company, company=company, connection_type=search_type)
        )

    def get_profile_details(self, profile_id: str) -> Optional[Profile]:
        """Fetch one profile; None when unavailable. Not cached."""
        if self.key_pool.is_empty:
            self.logger.warning("No RapidAPI LinkedIn keys configured, cannot fetch profile details")
            return None

        self.key_pool.rotate_if_exhausted()
        self.throttle.acquire()
        try:
            data = self._get_json(f"{self.BASE_URL}/profile/{profile_id}", None)
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"Profile details lookup failed for {profile_id}: {e}")
            return None

        self.key_pool.record_request()
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]
        if not isinstance(data, dict) or not data:
            return None
        return self.normalize_profile(data)

    def clear_cache(self) -> None:
        self.cache.clear()

    def _lookup(
        self,
        operation: str,
        params: ProfileSearchParams,
        query: dict,
        refine: Optional[Callable[[list[Profile]], list[Profile]]] = None,
    ) -> list[Profile]:
        refine = refine or list
        cache_key = f"{operation}:{params.cache_key()}"

        cached = self.cache.get(cache_key)
        if cached is not None:
            self.logger.debug(f"Cache hit for {operation} lookup '{params.query}'")
            return cached

        if self.key_pool.is_empty:
            return self._fallback(cache_key, params, refine)

        self.key_pool.rotate_if_exhausted()
        self.throttle.acquire()
        self.logger.info(
            f"LinkedIn {operation} lookup for '{params.query}' "
            f"(key {self.key_pool.index + 1}/{len(self.key_pool)})"
        )

        try:
            data = self._get_json(f"{self.BASE_URL}/search/people", query)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 403:
                self.logger.warning("LinkedIn API quota exhausted (403), rotating key and using sample data")
                self.key_pool.rotate()
            elif status == 429:
                self.logger.warning("LinkedIn API rate limit exceeded (429), using sample data")
            else:
                self.logger.error(f"LinkedIn {operation} lookup failed: {e}")
            return self._fallback(cache_key, params, refine)
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"LinkedIn {operation} lookup failed: {e}")
            return self._fallback(cache_key, params, refine)

        items = data.get("data") if isinstance(data, dict) else None
        if not isinstance(items, list):
            self.logger.warning("LinkedIn lookup returned no data, using sample data")
            return self._fallback(cache_key, params, refine)

        self.logger.debug(f"Found {len(items)} profiles via {operation} lookup")
        profiles = refine([self.normalize_profile(item) for item in items if isinstance(item, dict)])
        self.cache.set(cache_key, profiles)
        self.key_pool.record_request()
        return profiles

    def _fallback(self, cache_key: str, params: ProfileSearchParams, refine) -> list[Profile]:
        profiles = refine(self.generate_fallback_profiles(params))
        self.cache.set(cache_key, profiles)
        return profiles

    def _get_json(self, url: str, params: Optional[dict]) -> Any:
        headers = {
            "X-RapidAPI-Key": self.key_pool.current(),
            "X-RapidAPI-Host": self.API_HOST,
        }
        if params is not None:
            params = {k: v for k, v in params.items() if v is not None}
        response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def normalize_profile(self, payload: dict) -> Profile:
        """Map one upstream profile onto a Profile."""
        fields = apply_rules(payload, PROFILE_FIELD_RULES)

        name_parts = str(fields["name"] or "").split(None, 1)
        first_name = fields["first_name"] or (name_parts[0] if name_parts else "Unknown")
        last_name = fields["last_name"] or (name_parts[1] if len(name_parts) > 1 else "User")

        profile_url = fields["profile_url"]
        if not profile_url and fields["public_id"]:
            profile_url = f"https://linkedin.com/in/{fields['public_id']}"

        try:
            mutual_connections = int(fields["mutual_connections"])
        except (TypeError, ValueError):
            mutual_connections = 0

        return Profile(
            id=str(fields["id"] or f"profile_{uuid.uuid4().hex[:12]}"),
            first_name=str(first_name),
            last_name=str(last_name),
            headline=str(fields["headline"]),
            location=str(fields["location"]),
            profile_picture_url=fields["profile_picture_url"],
            company_name=fields["company_name"],
            job_title=fields["job_title"],
            connection_degree=determine_connection_degree(payload),
            mutual_connections=mutual_connections,
            last_interaction=fields["last_interaction"],
            search_criteria=str(fields["search_criteria"]),
            profile_url=profile_url,
        )

    def generate_fallback_profiles(self, params: ProfileSearchParams) -> list[Profile]:
        """Curated sample contacts for the requested company."""
        company = params.company or "Target Company"
        slug = re.sub(r"\s", "-", company.lower())
        today = date.fromtimestamp(self.clock.now())

        profiles = []
        for index, (first, last, title, location, category, mutual) in enumerate(
            profiles_for_company(company)
        ):
            profiles.append(Profile(
                id=f"sample_profile_{index}",
                first_name=first,
                last_name=last,
                headline=f"{TEST_PROFILE_MARKER} {title}",
                location=location,
                company_name=company,
                job_title=f"{TEST_TITLE_MARKER} {title}",
                connection_degree="potential",
                mutual_connections=mutual,
                last_interaction=(today - timedelta(days=3 + index * 11)).isoformat(),
                search_criteria=category,
                profile_url=f"https://linkedin.com/in/{first.lower()}-{last.lower()}-{slug}",
            ))
        return profiles
