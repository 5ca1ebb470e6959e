"""
LLM-generated news items.

Used to seed the news feed for companies and industries that have no
fetched coverage yet. Generation failures return None so a seeding run
skips the item and keeps going.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.llm_client import LLMClient, get_llm_client
from app.core.models import Company
from app.services.listings import NewNewsItem, NewsService

logger = logging.getLogger(__name__)

VALID_SENTIMENTS = {"positive", "negative", "neutral"}

NEWS_JSON_SHAPE = """{
  "headline": "News headline (max 100 chars)",
  "summary": "2-3 sentence summary",
  "sentiment": "positive" | "negative" | "neutral",
  "sourceName": "TechCrunch" | "Bloomberg" | "Reuters" | "CNBC" (pick one),
  "relevanceScore": 0.85
}"""

SYSTEM_PROMPT = (
    "You are a financial news analyst. Generate a realistic recent news item. "
    "Return ONLY valid JSON with no additional text."
)


def _to_news_item(
    data: Optional[Dict[str, Any]],
    industry: Optional[str],
    company_id: Optional[int] = None,
) -> Optional[NewNewsItem]:
    if not data or not data.get("headline"):
        return None

    sentiment = str(data.get("sentiment", "neutral")).lower()
    if sentiment not in VALID_SENTIMENTS:
        sentiment = "neutral"
    try:
        relevance = max(0.0, min(1.0, float(data.get("relevanceScore", 0.5))))
    except (TypeError, ValueError):
        relevance = 0.5

    return NewNewsItem(
        company_id=company_id,
        industry_category=industry,
        headline=str(data["headline"])[:500],
        summary=data.get("summary"),
        source_name=data.get("sourceName"),
        sentiment=sentiment,
        relevance_score=relevance,
        published_date=datetime.utcnow(),
    )


class NewsGenerator:
    """Generates company and industry news items with an LLM."""

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm = llm_client or get_llm_client()

    async def _generate(self, prompt: str) -> Optional[Dict[str, Any]]:
        response = await self.llm.complete(prompt, system_prompt=SYSTEM_PROMPT, json_mode=True)
        return response.parse_json()

    async def generate_company_news(
        self, company_name: str, industry: Optional[str], company_id: Optional[int] = None
    ) -> Optional[NewNewsItem]:
        if self.llm is None:
            return None
        prompt = (
            f"Generate a recent news headline and summary for {company_name} "
            f"({industry} industry).\n"
            "Include realistic details about company announcements, earnings, "
            "partnerships, or industry trends.\n\n"
            f"Return JSON with this exact structure:\n{NEWS_JSON_SHAPE}"
        )
        try:
            return _to_news_item(await self._generate(prompt), industry, company_id)
        except Exception as e:
            logger.error(f"Error generating company news for {company_name}: {e}")
            return None

    async def generate_industry_news(self, industry: str) -> Optional[NewNewsItem]:
        if self.llm is None:
            return None
        prompt = (
            f"Generate a recent industry news headline and summary for the {industry} sector.\n"
            "Include realistic details about market trends, regulations, innovations, "
            "or major announcements.\n\n"
            f"Return JSON with this exact structure:\n{NEWS_JSON_SHAPE}"
        )
        try:
            return _to_news_item(await self._generate(prompt), industry)
        except Exception as e:
            logger.error(f"Error generating industry news for {industry}: {e}")
            return None


async def seed_news(
    db: Session,
    generator: Optional[NewsGenerator] = None,
    company_limit: int = 20,
    industry_limit: int = 10,
) -> Dict[str, int]:
    """
    Generate and store one news item per company and per industry.

    Returns:
        {"company_news": n, "industry_news": m} counts of stored items
    """
    generator = generator or NewsGenerator()
    news = NewsService(db)
    counts = {"company_news": 0, "industry_news": 0}

    companies: List[Company] = db.query(Company).order_by(Company.id).limit(company_limit).all()
    logger.info(f"Generating AI news for {len(companies)} companies")
    for company in companies:
        item = await generator.generate_company_news(company.name, company.industry, company.id)
        if item:
            news.add_news(item)
            counts["company_news"] += 1

    industries = [
        row[0]
        for row in db.query(Company.industry)
        .filter(Company.industry.isnot(None))
        .distinct()
        .limit(industry_limit)
        .all()
    ]
    logger.info(f"Generating industry news for {len(industries)} industries")
    for industry in industries:
        item = await generator.generate_industry_news(industry)
        if item:
            news.add_news(item)
            counts["industry_news"] += 1

    return counts
