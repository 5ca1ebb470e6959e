"""
JSearch job search API client (via RapidAPI).

Unlike the other integrations, JSearch failures propagate: a missing key
raises MissingAPIKeyError and HTTP failures raise APIError.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.core.api_errors import APIError
from app.core.config import get_settings
from app.core.http_client import RapidAPIClient

logger = logging.getLogger(__name__)


@dataclass
class JSearchQuery:
    query: str = "software engineer jobs"
    page: int = 1
    num_pages: int = 1
    country: str = "us"
    date_posted: str = "all"  # all, today, 3days, week, month

    def to_query(self) -> Dict[str, str]:
        return {
            "query": self.query,
            "page": str(self.page),
            "num_pages": str(self.num_pages),
            "country": self.country,
            "date_posted": self.date_posted,
        }


class JSearchClient(RapidAPIClient):
    """Client for jsearch.p.rapidapi.com."""

    SOURCE_NAME = "jsearch"
    RAPIDAPI_HOST = "jsearch.p.rapidapi.com"
    BASE_URL = f"https://{RAPIDAPI_HOST}"

    def __init__(self, api_key: Optional[str] = None, **kwargs):
        # Raises MissingAPIKeyError before any request is attempted
        super().__init__(api_key=api_key or get_settings().require_jsearch_api_key(), **kwargs)

    async def search(self, query: Optional[JSearchQuery] = None) -> Dict[str, Any]:
        """
        Run a job search and return the provider response unchanged.

        Raises:
            APIError: On HTTP or network failure
        """
        query = query or JSearchQuery()
        try:
            return await self.get("/search", params=query.to_query(), resource_id=query.query)
        except APIError as e:
            logger.error(f"[JSearch Jobs] Search error: {e}")
            raise
