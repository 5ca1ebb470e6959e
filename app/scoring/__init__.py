"""
Scoring module: aggregate culture scores, filtering and similarity ranking.
"""

from app.scoring.aggregator import AggregateScore, compute_aggregate, get_aggregate_score
from app.scoring.filters import FilterCriteria, apply_filters, search_by_name
from app.scoring.similarity import rank_similar, similarity_score

__all__ = [
    "AggregateScore",
    "compute_aggregate",
    "get_aggregate_score",
    "FilterCriteria",
    "apply_filters",
    "search_by_name",
    "rank_similar",
    "similarity_score",
]
