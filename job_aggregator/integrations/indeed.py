"""
Indeed job search integration.

Indeed has restricted its public API, so listings are fetched through
a RapidAPI proxy using the shared RapidAPI key.
"""

from .rapidapi_board import RapidApiBoardProvider


class IndeedProvider(RapidApiBoardProvider):
    """Indeed job search provider."""

    HOST = "indeed11.p.rapidapi.com"
    PATH = "/search"
    QUERY_PARAM = "query"
    LOCATION_PARAM = "location"
    ID_PREFIX = "indeed"

    @property
    def name(self) -> str:
        return "Indeed"
