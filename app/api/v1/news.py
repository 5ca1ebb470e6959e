"""
Company and industry news endpoints.

News is read from the local cache. The refresh endpoint pulls recent
articles from NewsAPI into that cache.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.models import Company
from app.core.schemas import NewsResponse, to_dict, to_dicts
from app.services.listings import NewNewsItem, NewsService
from app.sources.newsapi import NewsAPIClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news", tags=["news"])


class NewsCreate(BaseModel):
    headline: str = Field(..., min_length=1, max_length=500)
    company_id: Optional[int] = None
    industry_category: Optional[str] = Field(None, max_length=100)
    summary: Optional[str] = None
    source_url: Optional[str] = None
    source_name: Optional[str] = Field(None, max_length=255)
    sentiment: Optional[str] = Field(None, pattern="^(positive|negative|neutral)$")
    relevance_score: Optional[float] = Field(None, ge=0, le=1)
    published_date: Optional[datetime] = None


@router.get("/company/{company_id}")
def get_company_news(
    company_id: int,
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return to_dicts(NewsResponse, NewsService(db).get_company_news(company_id, limit=limit))


@router.get("/industry/{category}")
def get_industry_news(
    category: str,
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return to_dicts(NewsResponse, NewsService(db).get_industry_news(category, limit=limit))


@router.post("", status_code=201)
def add_news(request: NewsCreate, db: Session = Depends(get_db)):
    record = NewsService(db).add_news(NewNewsItem(**request.model_dump()))
    return to_dict(NewsResponse, record)


@router.post("/company/{company_id}/refresh")
async def refresh_company_news(company_id: int, db: Session = Depends(get_db)):
    """
    Fetch recent articles about a company from NewsAPI and cache them.

    Returns the number stored; 0 when NEWSAPI_KEY is not configured.
    """
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise HTTPException(status_code=404, detail=f"Company {company_id} not found")

    async with NewsAPIClient() as client:
        items = await client.fetch_company_articles(company.name, company.id, company.industry)

    stored = NewsService(db).add_many(items)
    logger.info(f"Stored {stored} NewsAPI articles for {company.name}")
    return {"company_id": company_id, "stored": stored}
