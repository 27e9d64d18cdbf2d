"""
ZipRecruiter job search integration.
"""

from .rapidapi_board import RapidApiBoardProvider


class ZipRecruiterProvider(RapidApiBoardProvider):
    """ZipRecruiter job search provider."""

    HOST = "ziprecruiter1.p.rapidapi.com"
    PATH = "/jobs"
    QUERY_PARAM = "search"
    LOCATION_PARAM = "location"
    ID_PREFIX = "ziprecruiter"

    @property
    def name(self) -> str:
        return "ZipRecruiter"
