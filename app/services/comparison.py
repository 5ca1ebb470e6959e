"""
Side-by-side company comparison helpers.
"""

import asyncio
import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.models import Company, SalaryData
from app.core.schemas import (
    CompanyResponse,
    JobOpeningResponse,
    NewsResponse,
    SalaryResponse,
    to_dict,
    to_dicts,
)
from app.scoring.aggregator import get_aggregate_score, get_aggregate_scores
from app.scoring.filters import location_label
from app.services.listings import JobOpeningService, NewsService
from app.services.salary import SalaryService

logger = logging.getLogger(__name__)

COMPARISON_NEWS_LIMIT = 5


class ComparisonHelper:
    """Builds comparison views over a set of company ids."""

    def __init__(self, db: Session):
        self.db = db
        self.salaries = SalaryService(db)
        self.jobs = JobOpeningService(db)
        self.news = NewsService(db)

    def _companies(self, company_ids: List[int]) -> List[Company]:
        if not company_ids:
            return []
        return (
            self.db.query(Company)
            .filter(Company.id.in_(company_ids))
            .order_by(Company.id)
            .all()
        )

    async def _company_bundle(self, company: Company) -> Dict[str, Any]:
        # The session is shared, so each bundle runs its queries in turn on the event loop
        aggregate = get_aggregate_score(self.db, company.id)
        return {
            "company": to_dict(CompanyResponse, company),
            "aggregate_score": aggregate.to_dict() if aggregate else None,
            "salary_data": to_dicts(SalaryResponse, self.salaries.by_company(company.id)),
            "job_openings": to_dicts(JobOpeningResponse, self.jobs.get_job_openings(company.id)),
            "recent_news": to_dicts(
                NewsResponse, self.news.get_company_news(company.id, COMPARISON_NEWS_LIMIT)
            ),
        }

    async def get_comparison_data(self, company_ids: List[int]) -> List[Dict[str, Any]]:
        """
        Everything the comparison page needs for each company.

        Unknown ids are skipped. Any failing lookup fails the whole call.
        """
        companies = self._companies(company_ids)
        logger.debug(f"Building comparison data for {len(companies)} companies")
        return list(await asyncio.gather(*(self._company_bundle(c) for c in companies)))

    def get_company_metrics_summary(self, company_ids: List[int]) -> List[Dict[str, Any]]:
        """Flat rows of company identity plus aggregate metric fields."""
        companies = self._companies(company_ids)
        aggregates = get_aggregate_scores(self.db, [c.id for c in companies])

        rows = []
        for company in companies:
            row = {
                "id": company.id,
                "name": company.name,
                "industry": company.industry,
                "location": location_label(company),
                "size": company.size_range,
            }
            aggregate = aggregates.get(company.id)
            if aggregate:
                row.update(aggregate.to_dict())
            rows.append(row)
        return rows

    def get_salary_comparison_for_role(
        self, company_ids: List[int], job_title: str, level: str
    ) -> List[SalaryData]:
        if not company_ids:
            return []
        return self.salaries.compare(job_title, level, company_ids)
