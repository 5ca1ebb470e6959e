"""
Tests for side-by-side comparison helpers.
"""
from datetime import datetime

import pytest

from app.services.comparison import ComparisonHelper
from app.services.listings import NewNewsItem, NewsService


class TestComparisonHelper:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_comparison_data_bundles(self, test_db, sample_companies, sample_salaries):
        acme, globex = sample_companies["acme"], sample_companies["globex"]
        news = NewsService(test_db)
        for day in range(1, 8):
            news.add_news(NewNewsItem(
                headline=f"Acme day {day}", company_id=acme.id, published_date=datetime(2024, 1, day)
            ))

        bundles = await ComparisonHelper(test_db).get_comparison_data([globex.id, acme.id, 999])

        assert [b["company"]["name"] for b in bundles] == ["Acme Corp", "Globex"]
        acme_bundle = bundles[0]
        assert acme_bundle["aggregate_score"]["overall_rating"] == pytest.approx(4.4)
        assert len(acme_bundle["salary_data"]) == 2
        assert len(acme_bundle["recent_news"]) == 5
        assert acme_bundle["recent_news"][0]["headline"] == "Acme day 7"
        assert acme_bundle["job_openings"] == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_ids(self, test_db):
        assert await ComparisonHelper(test_db).get_comparison_data([]) == []

    @pytest.mark.unit
    def test_metrics_summary(self, test_db, sample_companies):
        ids = [sample_companies["initech"].id, sample_companies["unscored"].id]

        rows = ComparisonHelper(test_db).get_company_metrics_summary(ids)

        initech, unscored = rows
        assert initech["location"] == "Austin, TX"
        assert initech["size"] == "1001-5000"
        assert initech["overall_rating"] == pytest.approx(3.0)
        assert "overall_rating" not in unscored

    @pytest.mark.unit
    def test_salary_comparison_for_role(self, test_db, sample_companies, sample_salaries):
        helper = ComparisonHelper(test_db)
        ids = [sample_companies["acme"].id, sample_companies["globex"].id]

        rows = helper.get_salary_comparison_for_role(ids, "Software Engineer", "Senior")

        assert sorted(r.base_salary for r in rows) == [200000, 220000]
        assert helper.get_salary_comparison_for_role([], "Software Engineer", "Senior") == []
