"""
Company browsing service.

Listing, search, filtering, detail and similarity lookups over the
company table and its culture data.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.models import Company, CultureScore, CultureTrend, LayoffEvent
from app.core.schemas import (
    CompanyResponse,
    CultureScoreResponse,
    CultureTrendResponse,
    LayoffEventResponse,
    to_dict,
    to_dicts,
)
from app.scoring.aggregator import AggregateScore, get_aggregate_score, get_aggregate_scores
from app.scoring.filters import (
    DEFAULT_SEARCH_LIMIT,
    FilterCriteria,
    ScoredCompany,
    apply_filters,
    search_by_name,
)
from app.scoring.similarity import RankedCompany, rank_similar

logger = logging.getLogger(__name__)


def company_dict(company: Company, aggregate: Optional[AggregateScore] = None, **extra) -> Dict[str, Any]:
    """Company record with its aggregate score attached."""
    data = to_dict(CompanyResponse, company)
    data["aggregate_score"] = aggregate.to_dict() if aggregate else None
    data.update(extra)
    return data


def scored_dict(scored: ScoredCompany) -> Dict[str, Any]:
    return company_dict(scored.company, scored.aggregate)


def ranked_dict(ranked: RankedCompany) -> Dict[str, Any]:
    return company_dict(ranked.company, ranked.aggregate, similarity_score=ranked.similarity_score)


class CompanyService:
    """Read-side operations on companies."""

    def __init__(self, db: Session):
        self.db = db

    def all_companies(self) -> List[Company]:
        return self.db.query(Company).order_by(Company.id).all()

    def get_company(self, company_id: int) -> Optional[Company]:
        return self.db.query(Company).filter(Company.id == company_id).first()

    def get_aggregate_score(self, company_id: int) -> Optional[AggregateScore]:
        return get_aggregate_score(self.db, company_id)

    def filter_companies(self, criteria: FilterCriteria) -> List[ScoredCompany]:
        """Apply FilterCriteria to the full company list."""
        companies = self.all_companies()
        aggregates = get_aggregate_scores(self.db, [c.id for c in companies])
        results = apply_filters(companies, criteria, lambda c: aggregates.get(c.id))
        logger.debug(f"Company filter matched {len(results)} of {len(companies)} companies")
        return results

    def list_with_aggregate_scores(self, limit: int = 100, offset: int = 0) -> List[ScoredCompany]:
        """Every scored company, paginated."""
        return self.filter_companies(FilterCriteria(limit=limit, offset=offset))

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[Company]:
        """
        Case-insensitive substring search on company name.

        Matching runs in Python so % and _ in the query are literal and
        non-ASCII names fold case correctly.
        """
        return search_by_name(self.all_companies(), query, limit=limit)

    def get_company_with_scores(self, company_id: int) -> Optional[Dict[str, Any]]:
        """
        Company detail: the company plus its per-source scores, metric
        trends, layoff history and aggregate score.
        """
        company = self.get_company(company_id)
        if not company:
            return None

        scores = (
            self.db.query(CultureScore)
            .filter(CultureScore.company_id == company_id)
            .order_by(CultureScore.date_collected.desc())
            .all()
        )
        trends = (
            self.db.query(CultureTrend)
            .filter(CultureTrend.company_id == company_id)
            .order_by(CultureTrend.month_year.desc())
            .all()
        )
        layoffs = (
            self.db.query(LayoffEvent)
            .filter(LayoffEvent.company_id == company_id)
            .order_by(LayoffEvent.date.desc())
            .all()
        )
        aggregate = self.get_aggregate_score(company_id)

        return {
            "company": to_dict(CompanyResponse, company),
            "scores": to_dicts(CultureScoreResponse, scores),
            "trends": to_dicts(CultureTrendResponse, trends),
            "layoffs": to_dicts(LayoffEventResponse, layoffs),
            "aggregate_score": aggregate.to_dict() if aggregate else None,
        }

    def get_similar_companies(self, company_id: int, limit: int = 5) -> List[RankedCompany]:
        """Heuristic similarity ranking; empty if the company does not exist."""
        companies = self.all_companies()
        reference = next((c for c in companies if c.id == company_id), None)
        if reference is None:
            return []
        aggregates = get_aggregate_scores(self.db, [c.id for c in companies])
        return rank_similar(reference, companies, aggregates, limit=limit)
