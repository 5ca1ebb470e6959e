"""
Aggregate culture score computation.

A company's aggregate score is the per-metric mean of every CultureScore
row collected for it (one row per source), with the overall rating nudged
by the company's turnover rate and clamped to the 1-5 rating scale.
"""
import logging
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.models import Company, CultureScore

logger = logging.getLogger(__name__)

METRIC_FIELDS = (
    "overall_rating",
    "work_life_balance",
    "compensation_benefits",
    "career_opportunities",
    "culture_values",
    "senior_management",
    "ceo_approval",
    "recommend_to_friend",
)

MIN_RATING = 1.0
MAX_RATING = 5.0

# (upper bound inclusive, adjustment); anything above the last bound gets -0.5
TURNOVER_BRACKETS = (
    (10.0, 0.3),
    (20.0, 0.0),
    (30.0, -0.1),
    (40.0, -0.3),
)
HIGH_TURNOVER_ADJUSTMENT = -0.5


@dataclass
class AggregateScore:
    """Derived, never persisted. Metric means are None when no source reported them."""

    overall_rating: Optional[float]
    work_life_balance: Optional[float]
    compensation_benefits: Optional[float]
    career_opportunities: Optional[float]
    culture_values: Optional[float]
    senior_management: Optional[float]
    ceo_approval: Optional[float]
    recommend_to_friend: Optional[float]
    source_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _to_number(value: Any) -> Optional[float]:
    """Parse a stored metric; non-numeric and non-finite values count as absent."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _read(row: Any, field: str) -> Any:
    if isinstance(row, dict):
        return row.get(field)
    return getattr(row, field, None)


def mean_of(values: Iterable[Any]) -> Optional[float]:
    """Arithmetic mean of the parseable values, or None if there are none."""
    numbers = [n for n in (_to_number(v) for v in values) if n is not None]
    if not numbers:
        return None
    return sum(numbers) / len(numbers)


def turnover_adjustment(turnover_rate: float) -> float:
    """Rating adjustment for an annual turnover percentage."""
    for upper_bound, adjustment in TURNOVER_BRACKETS:
        if turnover_rate <= upper_bound:
            return adjustment
    return HIGH_TURNOVER_ADJUSTMENT


def clamp_rating(value: float) -> float:
    return max(MIN_RATING, min(MAX_RATING, value))


def compute_aggregate(rows: List[Any], turnover_rate: Any = None) -> Optional[AggregateScore]:
    """
    Combine per-source score rows into one AggregateScore.

    Args:
        rows: CultureScore rows (ORM objects or dicts keyed by metric field)
        turnover_rate: Company turnover percentage, or None if unknown

    Returns:
        None when there are no rows at all.
    """
    if not rows:
        return None

    means = {field: mean_of(_read(row, field) for row in rows) for field in METRIC_FIELDS}

    overall = means["overall_rating"]
    if overall is not None:
        turnover = _to_number(turnover_rate)
        if turnover is not None:
            overall += turnover_adjustment(turnover)
        means["overall_rating"] = clamp_rating(overall)

    return AggregateScore(source_count=len(rows), **means)


def get_aggregate_score(db: Session, company_id: int) -> Optional[AggregateScore]:
    """Load a company's score rows and turnover rate, then aggregate them."""
    rows = db.query(CultureScore).filter(CultureScore.company_id == company_id).all()
    if not rows:
        return None

    turnover_rate = (
        db.query(Company.turnover_rate).filter(Company.id == company_id).scalar()
    )
    return compute_aggregate(rows, turnover_rate)


def get_aggregate_scores(db: Session, company_ids: Iterable[int]) -> Dict[int, Optional[AggregateScore]]:
    """
    Aggregate scores for many companies with two queries instead of 2N.

    Companies without any score rows map to None.
    """
    ids = list(company_ids)
    if not ids:
        return {}

    rows_by_company: Dict[int, List[CultureScore]] = {company_id: [] for company_id in ids}
    for row in db.query(CultureScore).filter(CultureScore.company_id.in_(ids)).all():
        rows_by_company[row.company_id].append(row)

    turnover = dict(
        db.query(Company.id, Company.turnover_rate).filter(Company.id.in_(ids)).all()
    )
    return {
        company_id: compute_aggregate(rows, turnover.get(company_id))
        for company_id, rows in rows_by_company.items()
    }
