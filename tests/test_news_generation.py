"""
Tests for LLM-generated news items.
"""
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.models import CompanyNews
from app.services.news_generation import NewsGenerator, _to_news_item, seed_news
from tests.conftest import make_llm_response


class TestToNewsItem:

    @pytest.mark.unit
    def test_normalizes_sentiment_and_relevance(self):
        item = _to_news_item(
            {"headline": "Acme hires", "sentiment": "Ecstatic", "relevanceScore": 3}, "Technology", 1
        )
        assert item.sentiment == "neutral"
        assert item.relevance_score == 1.0
        assert item.company_id == 1
        assert item.published_date is not None

    @pytest.mark.unit
    def test_bad_relevance_defaults(self):
        item = _to_news_item({"headline": "x", "relevanceScore": "high"}, None)
        assert item.relevance_score == 0.5

    @pytest.mark.unit
    def test_missing_headline(self):
        assert _to_news_item({"summary": "no headline"}, "Technology") is None
        assert _to_news_item(None, "Technology") is None


class TestNewsGenerator:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_company_news(self, mock_llm):
        mock_llm.complete.return_value = make_llm_response(json.dumps({
            "headline": "Acme launches product",
            "summary": "Big launch.",
            "sentiment": "positive",
            "sourceName": "Reuters",
            "relevanceScore": 0.9,
        }))

        item = await NewsGenerator(mock_llm).generate_company_news("Acme", "Technology", 7)

        assert item.headline == "Acme launches product"
        assert item.sentiment == "positive"
        assert item.source_name == "Reuters"
        assert item.company_id == 7
        assert "Acme" in mock_llm.complete.await_args.args[0]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_returns_none(self, mock_llm):
        mock_llm.complete.side_effect = RuntimeError("boom")
        assert await NewsGenerator(mock_llm).generate_industry_news("Finance") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_llm(self, app_env):
        generator = NewsGenerator()
        assert await generator.generate_company_news("Acme", "Technology") is None


class TestSeedNews:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stores_company_and_industry_items(self, test_db, sample_companies):
        generator = MagicMock(spec=NewsGenerator)
        generator.generate_company_news = AsyncMock(
            side_effect=lambda name, industry, company_id: (
                None if name == "Globex" else _to_news_item({"headline": name}, industry, company_id)
            )
        )
        generator.generate_industry_news = AsyncMock(
            side_effect=lambda industry: _to_news_item({"headline": f"{industry} outlook"}, industry)
        )

        counts = await seed_news(test_db, generator, company_limit=3)

        assert counts == {"company_news": 2, "industry_news": 3}
        assert test_db.query(CompanyNews).count() == 5
