"""
NewsAPI client (newsapi.org).

Fetches recent articles that mention a company and reshapes them into
company news records. Missing key or provider failure yields [].
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.api_errors import APIError, FatalError
from app.core.config import get_settings
from app.core.http_client import BaseAPIClient
from app.services.listings import NewNewsItem

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5
DEFAULT_RELEVANCE = 0.5


def _parse_published(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        # Stored as naive UTC like every other timestamp column
        return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        return None


def parse_article(
    article: Dict[str, Any], company_id: int, industry: Optional[str]
) -> Optional[NewNewsItem]:
    headline = (article.get("title") or "").strip()
    if not headline or headline == "[Removed]":
        return None
    source = article.get("source") or {}
    return NewNewsItem(
        company_id=company_id,
        industry_category=industry,
        headline=headline[:500],
        summary=article.get("description"),
        source_url=article.get("url"),
        source_name=source.get("name") if isinstance(source, dict) else None,
        sentiment="neutral",
        relevance_score=DEFAULT_RELEVANCE,
        published_date=_parse_published(article.get("publishedAt")),
    )


class NewsAPIClient(BaseAPIClient):
    """Client for the NewsAPI /v2/everything endpoint."""

    SOURCE_NAME = "newsapi"
    BASE_URL = "https://newsapi.org/v2"

    def __init__(self, api_key: Optional[str] = None, **kwargs):
        super().__init__(api_key=api_key or get_settings().get_newsapi_key(), **kwargs)

    def _add_auth_to_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["apiKey"] = self.api_key
        return params

    async def fetch_company_articles(
        self,
        company_name: str,
        company_id: int,
        industry: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> List[NewNewsItem]:
        """Most recent English articles mentioning the company."""
        if not self.is_configured:
            logger.warning("[NewsAPI] NEWSAPI_KEY not configured")
            return []

        try:
            data = await self.get(
                "/everything",
                params={
                    "q": f'"{company_name}"',
                    "language": "en",
                    "sortBy": "publishedAt",
                    "pageSize": page_size,
                },
                resource_id=company_name,
            )
            if isinstance(data, dict) and data.get("status") == "error":
                raise FatalError(
                    message=data.get("message", "NewsAPI error"), source=self.SOURCE_NAME
                )
        except APIError as e:
            logger.error(f"[NewsAPI] Failed to fetch news for {company_name}: {e}")
            return []

        articles = (data.get("articles") or []) if isinstance(data, dict) else []
        items = [parse_article(a, company_id, industry) for a in articles if isinstance(a, dict)]
        return [item for item in items if item is not None]
