"""
Unit tests for job openings and news storage.
"""
from datetime import date, datetime

import pytest

from app.services.listings import JobOpeningService, NewJobOpening, NewNewsItem, NewsService


class TestJobOpeningService:

    @pytest.mark.unit
    def test_newest_posting_first(self, test_db, sample_companies):
        service = JobOpeningService(test_db)
        company_id = sample_companies["acme"].id
        service.add_job_opening(NewJobOpening(
            company_id=company_id, job_title="Backend Engineer", posted_date=date(2024, 1, 1)
        ))
        service.add_job_opening(NewJobOpening(
            company_id=company_id, job_title="Data Analyst", posted_date=date(2024, 3, 1),
            salary_min=90000, salary_max=120000,
        ))

        jobs = service.get_job_openings(company_id)

        assert [j.job_title for j in jobs] == ["Data Analyst", "Backend Engineer"]
        assert service.get_job_openings(sample_companies["globex"].id) == []


class TestNewsService:

    @pytest.mark.unit
    def test_company_news_limit_and_order(self, test_db, sample_companies):
        service = NewsService(test_db)
        company_id = sample_companies["acme"].id
        for day in (1, 3, 2):
            service.add_news(NewNewsItem(
                headline=f"Story {day}",
                company_id=company_id,
                published_date=datetime(2024, 5, day),
            ))

        news = service.get_company_news(company_id, limit=2)

        assert [n.headline for n in news] == ["Story 3", "Story 2"]

    @pytest.mark.unit
    def test_industry_news(self, test_db):
        service = NewsService(test_db)
        service.add_news(NewNewsItem(headline="Chips rally", industry_category="Technology"))
        service.add_news(NewNewsItem(headline="Rates hold", industry_category="Finance"))

        news = service.get_industry_news("Technology")

        assert [n.headline for n in news] == ["Chips rally"]
        assert news[0].published_date is not None

    @pytest.mark.unit
    def test_add_many(self, test_db, sample_companies):
        service = NewsService(test_db)
        items = [
            NewNewsItem(headline="A", company_id=sample_companies["globex"].id, sentiment="positive"),
            NewNewsItem(headline="B", company_id=sample_companies["globex"].id, relevance_score=0.7),
        ]

        assert service.add_many(items) == 2
        assert len(service.get_company_news(sample_companies["globex"].id)) == 2
