"""
Company browsing endpoints.

Listing, name search, multi-criteria filtering, detail, and similar-company
lookups. Every company record carries its aggregate culture score.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.schemas import CompanyResponse, to_dicts
from app.scoring.filters import FilterCriteria
from app.services.companies import CompanyService, ranked_dict, scored_dict
from app.services.recommendations import RecommendationService

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("")
def list_companies(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """Scored companies with their aggregate culture scores."""
    service = CompanyService(db)
    return [scored_dict(s) for s in service.list_with_aggregate_scores(limit=limit, offset=offset)]


@router.get("/search")
def search_companies(
    q: str = Query(..., min_length=1, description="Case-insensitive name substring"),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return to_dicts(CompanyResponse, CompanyService(db).search(q, limit=limit))


@router.get("/filter")
def filter_companies(
    location: Optional[str] = Query(None, description='Substring of "City, ST"'),
    industry: Optional[str] = Query(None),
    industries: Optional[List[str]] = Query(None, description="Any of these industries"),
    size_range: Optional[str] = Query(None),
    min_score: Optional[float] = Query(None, ge=0, le=5),
    max_score: Optional[float] = Query(None, ge=0, le=5),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """
    Filter companies by location, industry, size and aggregate score.

    Companies without any culture scores never match.
    """
    criteria = FilterCriteria(
        location=location,
        industry=industry,
        industries=industries or [],
        size_range=size_range,
        min_score=min_score,
        max_score=max_score,
        limit=limit,
        offset=offset,
    )
    return [scored_dict(s) for s in CompanyService(db).filter_companies(criteria)]


@router.get("/{company_id}")
def get_company(company_id: int, db: Session = Depends(get_db)):
    """Company with per-source scores, trends, layoffs and aggregate score."""
    result = CompanyService(db).get_company_with_scores(company_id)
    if not result:
        raise HTTPException(status_code=404, detail=f"Company {company_id} not found")
    return result


@router.get("/{company_id}/similar")
def get_similar_companies(
    company_id: int,
    limit: int = Query(5, ge=1, le=50),
    db: Session = Depends(get_db),
):
    """Weighted similarity on industry, size, location and score proximity."""
    service = CompanyService(db)
    if not service.get_company(company_id):
        raise HTTPException(status_code=404, detail=f"Company {company_id} not found")
    return [ranked_dict(r) for r in service.get_similar_companies(company_id, limit=limit)]


@router.get("/{company_id}/similar/ai")
async def get_ai_similar_companies(
    company_id: int,
    limit: int = Query(5, ge=1, le=20),
    db: Session = Depends(get_db),
):
    """LLM-chosen similar companies, falling back to the weighted ranking."""
    service = RecommendationService(db)
    if not service.companies.get_company(company_id):
        raise HTTPException(status_code=404, detail=f"Company {company_id} not found")
    result = await service.ai_similar_companies(company_id, limit=limit)
    return result.to_dict()
