"""
Glassdoor job search integration.
"""

from .rapidapi_board import RapidApiBoardProvider


class GlassdoorProvider(RapidApiBoardProvider):
    """Glassdoor job search provider."""

    HOST = "glassdoor-api.p.rapidapi.com"
    PATH = "/jobs"
    QUERY_PARAM = "q"
    LOCATION_PARAM = "l"
    ID_PREFIX = "glassdoor"

    @property
    def name(self) -> str:
        return "Glassdoor"
