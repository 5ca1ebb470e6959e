"""
Tests for static demo data.
"""
import pytest

from app.services.demo import DemoFilter, filter_companies, get_companies, get_company_by_id


class TestDemoData:

    @pytest.mark.unit
    def test_twelve_companies_with_scores(self):
        companies = get_companies()
        assert len(companies) == 12
        assert all(c["aggregate_score"]["source_count"] == 3 for c in companies)

    @pytest.mark.unit
    def test_returns_copies(self):
        get_companies()[0]["name"] = "Changed"
        assert get_company_by_id(1)["name"] == "Google"

    @pytest.mark.unit
    def test_unknown_id(self):
        assert get_company_by_id(99) is None

    @pytest.mark.unit
    def test_filter_location_and_industry(self):
        results = filter_companies(DemoFilter(location="new york", industry="Finance"))
        assert [c["name"] for c in results] == ["JPMorgan Chase", "Goldman Sachs"]

    @pytest.mark.unit
    def test_filter_score_range(self):
        results = filter_companies(DemoFilter(min_score=4.4))
        assert [c["name"] for c in results] == ["Google", "Nvidia"]

        results = filter_companies(DemoFilter(max_score=3.5))
        assert [c["name"] for c in results] == ["Tesla"]
