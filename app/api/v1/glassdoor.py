"""
Glassdoor interview and company-metric endpoints.

Data is fetched from the RapidAPI Glassdoor service on refresh and served
from the local cache afterwards.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.models import Company
from app.core.schemas import GlassdoorMetricsResponse, InterviewResponse, to_dict, to_dicts
from app.sources.glassdoor import GlassdoorCache

router = APIRouter(prefix="/glassdoor", tags=["Glassdoor"])


@router.post("/{company_id}/refresh")
async def refresh_company(company_id: int, db: Session = Depends(get_db)):
    """
    Fetch interviews and company metrics from Glassdoor and cache them.

    Returns {"success": true, "interviews_count": n} or
    {"success": false, "error": "..."}.
    """
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise HTTPException(status_code=404, detail=f"Company {company_id} not found")
    return await GlassdoorCache(db).fetch_and_cache(company.id, company.name)


@router.get("/{company_id}/interviews")
def get_interviews(
    company_id: int,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    rows = GlassdoorCache(db).get_company_interviews(company_id, limit=limit)
    return to_dicts(InterviewResponse, rows)


@router.get("/{company_id}/interviews/by-title")
def get_interviews_by_title(
    company_id: int,
    job_title: str = Query(..., min_length=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    rows = GlassdoorCache(db).get_interviews_by_job_title(company_id, job_title, limit=limit)
    return to_dicts(InterviewResponse, rows)


@router.get("/{company_id}/metrics")
def get_metrics(company_id: int, db: Session = Depends(get_db)):
    metrics = GlassdoorCache(db).get_metrics(company_id)
    if not metrics:
        raise HTTPException(status_code=404, detail=f"No Glassdoor metrics for company {company_id}")
    return to_dict(GlassdoorMetricsResponse, metrics)
