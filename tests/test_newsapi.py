"""
Tests for the NewsAPI client.
"""
from datetime import datetime
from unittest.mock import AsyncMock

import httpx
import pytest

from app.sources.newsapi import NewsAPIClient
from app.sources.newsapi.client import parse_article

ARTICLES = {
    "status": "ok",
    "articles": [
        {
            "title": "Acme opens new office",
            "description": "Expansion in Austin",
            "url": "https://example.com/acme",
            "source": {"name": "Example News"},
            "publishedAt": "2024-06-01T12:30:00Z",
        },
        {"title": "[Removed]"},
        {"title": ""},
    ],
}


class TestParseArticle:

    @pytest.mark.unit
    def test_maps_fields(self):
        item = parse_article(ARTICLES["articles"][0], company_id=3, industry="Technology")

        assert item.company_id == 3
        assert item.industry_category == "Technology"
        assert item.source_name == "Example News"
        assert item.sentiment == "neutral"
        assert item.relevance_score == 0.5
        assert item.published_date == datetime(2024, 6, 1, 12, 30)

    @pytest.mark.unit
    def test_removed_articles_are_skipped(self):
        assert parse_article({"title": "[Removed]"}, 1, None) is None


class TestNewsAPIClient:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unconfigured(self, app_env):
        assert await NewsAPIClient().fetch_company_articles("Acme", 1) == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_fetch_sends_key_and_quoted_name(self, app_env):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=ARTICLES)

        client = NewsAPIClient(
            api_key="news-key", client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
        )
        items = await client.fetch_company_articles("Acme Corp", company_id=1)

        assert [i.headline for i in items] == ["Acme opens new office"]
        assert seen["params"]["apiKey"] == "news-key"
        assert seen["params"]["q"] == '"Acme Corp"'
        assert seen["params"]["pageSize"] == "5"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_error_status_in_body(self, app_env):
        client = NewsAPIClient(api_key="news-key")
        client.get = AsyncMock(return_value={"status": "error", "message": "rateLimited"})

        assert await client.fetch_company_articles("Acme", 1) == []
