"""
In-memory company filtering and name search.

The company table holds a few hundred rows, so filters run over the full
list in Python rather than as SQL. Predicates are applied in a fixed order:
location, industry, size range, then aggregate-score range, followed by
offset/limit pagination.
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from app.core.models import Company
from app.scoring.aggregator import AggregateScore

DEFAULT_FILTER_LIMIT = 100
DEFAULT_SEARCH_LIMIT = 20


@dataclass
class FilterCriteria:
    """Company filter parameters. Unset fields do not filter."""

    location: Optional[str] = None
    industry: Optional[str] = None
    industries: List[str] = field(default_factory=list)
    size_range: Optional[str] = None
    min_score: Optional[float] = None
    max_score: Optional[float] = None
    limit: int = DEFAULT_FILTER_LIMIT
    offset: int = 0


@dataclass
class ScoredCompany:
    company: Company
    aggregate: AggregateScore


def location_label(company: Company) -> str:
    """City and state joined as 'City, ST'; a missing part renders empty."""
    return f"{company.headquarters_city or ''}, {company.headquarters_state or ''}"


def _matches_location(company: Company, location: str) -> bool:
    return location.lower() in location_label(company).lower()


def _matches_industry(company: Company, criteria: FilterCriteria) -> bool:
    # A list of industries takes priority over the single industry field
    if criteria.industries:
        return company.industry in criteria.industries
    if criteria.industry:
        return company.industry == criteria.industry
    return True


def _in_score_range(aggregate: AggregateScore, criteria: FilterCriteria) -> bool:
    if criteria.min_score is None and criteria.max_score is None:
        return True
    overall = aggregate.overall_rating
    if overall is None:
        return False
    if criteria.min_score is not None and overall < criteria.min_score:
        return False
    if criteria.max_score is not None and overall > criteria.max_score:
        return False
    return True


def apply_filters(
    companies: Sequence[Company],
    criteria: FilterCriteria,
    aggregate_for: Callable[[Company], Optional[AggregateScore]],
) -> List[ScoredCompany]:
    """
    Filter companies and attach their aggregate scores.

    Companies with no aggregate score are always dropped.

    Args:
        companies: Full company list
        criteria: Filter parameters
        aggregate_for: Returns a company's AggregateScore (or None)
    """
    candidates = list(companies)

    if criteria.location:
        candidates = [c for c in candidates if _matches_location(c, criteria.location)]

    candidates = [c for c in candidates if _matches_industry(c, criteria)]

    if criteria.size_range:
        candidates = [c for c in candidates if c.size_range == criteria.size_range]

    results = []
    for company in candidates:
        aggregate = aggregate_for(company)
        if aggregate is None or not _in_score_range(aggregate, criteria):
            continue
        results.append(ScoredCompany(company=company, aggregate=aggregate))

    offset = max(criteria.offset, 0)
    return results[offset:offset + criteria.limit]


def search_by_name(
    companies: Sequence[Company], query: str, limit: int = DEFAULT_SEARCH_LIMIT
) -> List[Company]:
    """Case-insensitive substring match on company name."""
    needle = query.lower()
    return [c for c in companies if needle in (c.name or "").lower()][:limit]
