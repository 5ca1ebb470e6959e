"""
LLM-assisted company recommendations.

Both entry points narrow the company list in Python, ask the LLM to rank
the survivors, and fall back to a deterministic ranking when no LLM is
configured, the call fails, or the reply is not the expected JSON. RankingResult.strategy reports which path
produced the list.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.llm_client import LLMClient, get_llm_client
from app.core.models import Company
from app.scoring.aggregator import AggregateScore, get_aggregate_scores
from app.scoring.filters import location_label
from app.services.companies import CompanyService, company_dict, ranked_dict

logger = logging.getLogger(__name__)

STRATEGY_AI = "ai"
STRATEGY_HEURISTIC = "heuristic"

MAX_RECOMMENDATION_CANDIDATES = 20
MAX_SIMILAR_CANDIDATES = 30

SYSTEM_PROMPT = "You are a helpful career advisor. Always respond with valid JSON."


@dataclass
class RankingResult:
    strategy: str  # ai | heuristic
    companies: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"strategy": self.strategy, "companies": self.companies}


@dataclass
class RecommendationPreferences:
    preferred_industry: Optional[str] = None
    preferred_location: Optional[str] = None  # "City, ST"
    preferred_size: Optional[str] = None
    min_culture_score: Optional[float] = None
    max_culture_score: Optional[float] = None
    priorities: List[str] = field(default_factory=list)
    exclude_company_ids: List[int] = field(default_factory=list)


def _fmt(value: Optional[float]) -> str:
    return f"{value:.2f}" if value is not None else "N/A"


def _overall(aggregate: Optional[AggregateScore]) -> float:
    # Unscored companies rank as 0 for recommendation purposes
    if aggregate is None or aggregate.overall_rating is None:
        return 0.0
    return aggregate.overall_rating


def _describe(company: Company, aggregate: Optional[AggregateScore], detailed: bool) -> str:
    text = (
        f"- {company.name} ({company.industry}, {location_label(company)}, "
        f"Size: {company.size_range}, Culture Score: "
        f"{_fmt(aggregate.overall_rating if aggregate else None)}/5"
    )
    if detailed:
        text += (
            f", Work-Life Balance: {_fmt(aggregate.work_life_balance if aggregate else None)}/5"
            f", Compensation: {_fmt(aggregate.compensation_benefits if aggregate else None)}/5"
        )
    return text + ")"


def _match_by_name(items: List[Any], companies: List[Company]) -> List[tuple]:
    """Pair LLM items with companies by case-insensitive name; unmatched items are dropped."""
    by_name = {c.name.lower(): c for c in companies}
    matched = []
    seen = set()
    for item in items:
        if not isinstance(item, dict):
            continue
        company = by_name.get(str(item.get("name", "")).lower())
        if company is None or company.id in seen:
            continue
        seen.add(company.id)
        matched.append((item, company))
    return matched


def _reply_items(response: Any, key: str) -> List[Any]:
    """The list under key in the LLM's JSON reply; ValueError when the reply is unusable."""
    parsed = response.parse_json()
    if not isinstance(parsed, dict) or not isinstance(parsed.get(key), list):
        raise ValueError(f"LLM reply has no '{key}' list")
    return parsed[key]


class RecommendationService:
    """Personalised and similar-company recommendations."""

    def __init__(self, db: Session, llm_client: Optional[LLMClient] = None):
        self.db = db
        self.companies = CompanyService(db)
        self._llm = llm_client

    @property
    def llm(self) -> Optional[LLMClient]:
        if self._llm is None:
            self._llm = get_llm_client()
        return self._llm

    def _candidates(
        self,
        prefs: RecommendationPreferences,
        candidates: List[Company],
        aggregates: Dict[int, Optional[AggregateScore]],
    ) -> List[Company]:
        if prefs.preferred_industry:
            candidates = [c for c in candidates if c.industry == prefs.preferred_industry]
        if prefs.preferred_location:
            wanted = prefs.preferred_location.lower()
            candidates = [c for c in candidates if location_label(c).lower() == wanted]
        if prefs.preferred_size:
            candidates = [c for c in candidates if c.size_range == prefs.preferred_size]
        if prefs.min_culture_score is not None:
            candidates = [
                c for c in candidates if _overall(aggregates.get(c.id)) >= prefs.min_culture_score
            ]
        if prefs.max_culture_score is not None:
            candidates = [
                c for c in candidates if _overall(aggregates.get(c.id)) <= prefs.max_culture_score
            ]
        if prefs.exclude_company_ids:
            excluded = set(prefs.exclude_company_ids)
            candidates = [c for c in candidates if c.id not in excluded]
        return candidates

    async def get_ai_recommendations(
        self, prefs: RecommendationPreferences, limit: int = 5
    ) -> RankingResult:
        """
        Recommend companies matching the user's preferences.

        Returns an empty heuristic result if nothing matches the filters.
        """
        companies = self.companies.all_companies()
        aggregates = get_aggregate_scores(self.db, [c.id for c in companies])
        candidates = self._candidates(prefs, companies, aggregates)
        if not candidates:
            return RankingResult(strategy=STRATEGY_HEURISTIC)

        if self.llm is not None:
            top = candidates[:MAX_RECOMMENDATION_CANDIDATES]
            wanted = min(limit, len(candidates))
            description = "\n".join(_describe(c, aggregates.get(c.id), detailed=True) for c in top)
            priorities = ", ".join(prefs.priorities) or "overall culture fit"
            prompt = (
                "You are a career advisor helping someone find the best company to work for.\n\n"
                f"Given these companies:\n{description}\n\n"
                f"User priorities: {priorities}\n\n"
                f"Rank the top {wanted} companies that best match the user's priorities. "
                "For each company, provide:\n"
                f"1. Ranking position (1-{wanted})\n"
                "2. Company name\n"
                "3. Why it's a good match (1-2 sentences)\n"
                "4. Key strengths for this user's priorities\n\n"
                'Return a JSON object {"recommendations": [...]} whose items contain: '
                "rank, name, matchReason, keyStrengths"
            )
            try:
                response = await self.llm.complete(prompt, system_prompt=SYSTEM_PROMPT, json_mode=True)
                items = _reply_items(response, "recommendations")
                recommended = [
                    company_dict(
                        company,
                        aggregates.get(company.id),
                        rank=item.get("rank"),
                        ai_match_reason=item.get("matchReason"),
                        ai_key_strengths=item.get("keyStrengths"),
                    )
                    for item, company in _match_by_name(items, top)
                ]
                return RankingResult(strategy=STRATEGY_AI, companies=recommended[:limit])
            except Exception as e:
                logger.error(f"[Recommendation] Error calling LLM: {e}")

        ranked = sorted(candidates, key=lambda c: (-_overall(aggregates.get(c.id)), c.id))
        return RankingResult(
            strategy=STRATEGY_HEURISTIC,
            companies=[company_dict(c, aggregates.get(c.id)) for c in ranked[:limit]],
        )

    async def ai_similar_companies(self, company_id: int, limit: int = 5) -> RankingResult:
        """
        Companies similar to company_id, chosen by the LLM with a short
        reason each. Falls back to the weighted heuristic ranker.
        """
        companies = self.companies.all_companies()
        reference = next((c for c in companies if c.id == company_id), None)
        if reference is None:
            return RankingResult(strategy=STRATEGY_HEURISTIC)

        if self.llm is not None:
            aggregates = get_aggregate_scores(self.db, [c.id for c in companies])
            ref_score = aggregates.get(reference.id)
            others = [c for c in companies if c.id != company_id][:MAX_SIMILAR_CANDIDATES]
            reference_desc = (
                f"{reference.name} is a {reference.industry} company with {reference.size_range} "
                f"employees located in {location_label(reference)}. "
                f"Culture Score: {_fmt(ref_score.overall_rating if ref_score else None)}/5, "
                f"Work-Life Balance: {_fmt(ref_score.work_life_balance if ref_score else None)}/5, "
                f"Compensation: {_fmt(ref_score.compensation_benefits if ref_score else None)}/5"
            )
            description = "\n".join(_describe(c, aggregates.get(c.id), detailed=False) for c in others)
            prompt = (
                f"You are a career advisor. Given this company:\n\n{reference_desc}\n\n"
                f"Find the top {limit} most similar companies from this list based on industry, "
                f"company culture, size, and location:\n\n{description}\n\n"
                "For each similar company, explain why it's similar in 1-2 sentences.\n\n"
                'Return a JSON object {"similar_companies": [...]} whose items contain: '
                "name, similarity_reason"
            )
            try:
                response = await self.llm.complete(prompt, system_prompt=SYSTEM_PROMPT, json_mode=True)
                items = _reply_items(response, "similar_companies")
                similar = [
                    company_dict(
                        company,
                        aggregates.get(company.id),
                        ai_similarity_reason=item.get("similarity_reason"),
                    )
                    for item, company in _match_by_name(items, others)
                ]
                return RankingResult(strategy=STRATEGY_AI, companies=similar[:limit])
            except Exception as e:
                logger.error(f"[Similar Companies] Error calling LLM: {e}")

        ranked = self.companies.get_similar_companies(company_id, limit=limit)
        return RankingResult(strategy=STRATEGY_HEURISTIC, companies=[ranked_dict(r) for r in ranked])
