"""
Deterministic "similar companies" ranking.

Points are awarded for matching industry (40), size range (30), and
headquarters city and state (15), plus up to 15 for how close the two
companies' overall ratings are. The maximum score is 100.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from app.core.models import Company
from app.scoring.aggregator import AggregateScore

INDUSTRY_POINTS = 40
SIZE_POINTS = 30
LOCATION_POINTS = 15

# (max rating difference inclusive, points)
PROXIMITY_TIERS = (
    (1.0, 15),
    (2.0, 10),
    (3.0, 5),
)

MAX_SIMILARITY = INDUSTRY_POINTS + SIZE_POINTS + LOCATION_POINTS + PROXIMITY_TIERS[0][1]


@dataclass
class RankedCompany:
    company: Company
    aggregate: Optional[AggregateScore]
    similarity_score: int


def proximity_points(a: Optional[float], b: Optional[float]) -> int:
    if a is None or b is None:
        return 0
    diff = abs(a - b)
    for max_diff, points in PROXIMITY_TIERS:
        if diff <= max_diff:
            return points
    return 0


def similarity_score(
    reference: Company,
    reference_score: Optional[AggregateScore],
    candidate: Company,
    candidate_score: Optional[AggregateScore],
) -> int:
    score = 0
    if reference.industry == candidate.industry:
        score += INDUSTRY_POINTS
    if reference.size_range == candidate.size_range:
        score += SIZE_POINTS
    if (
        reference.headquarters_city == candidate.headquarters_city
        and reference.headquarters_state == candidate.headquarters_state
    ):
        score += LOCATION_POINTS
    score += proximity_points(
        reference_score.overall_rating if reference_score else None,
        candidate_score.overall_rating if candidate_score else None,
    )
    return score


def rank_similar(
    reference: Company,
    candidates: Sequence[Company],
    aggregates: Dict[int, Optional[AggregateScore]],
    limit: int = 5,
) -> List[RankedCompany]:
    """
    Rank candidates by similarity to the reference company.

    The reference itself is skipped. Ties break on company id ascending.
    """
    reference_score = aggregates.get(reference.id)
    ranked = [
        RankedCompany(
            company=candidate,
            aggregate=aggregates.get(candidate.id),
            similarity_score=similarity_score(
                reference, reference_score, candidate, aggregates.get(candidate.id)
            ),
        )
        for candidate in candidates
        if candidate.id != reference.id
    ]
    ranked.sort(key=lambda r: (-r.similarity_score, r.company.id))
    return ranked[:limit]
