"""
Demo heat map endpoints backed by static data.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.services import demo

router = APIRouter(prefix="/demo", tags=["demo"])


@router.get("/companies")
def get_demo_companies():
    return demo.get_companies()


@router.get("/companies/filter")
def filter_demo_companies(
    location: Optional[str] = Query(None),
    industry: Optional[str] = Query(None),
    min_score: Optional[float] = Query(None, ge=0, le=5),
    max_score: Optional[float] = Query(None, ge=0, le=5),
):
    criteria = demo.DemoFilter(
        location=location, industry=industry, min_score=min_score, max_score=max_score
    )
    return demo.filter_companies(criteria)


@router.get("/companies/{company_id}")
def get_demo_company(company_id: int):
    company = demo.get_company_by_id(company_id)
    if not company:
        raise HTTPException(status_code=404, detail=f"Demo company {company_id} not found")
    return company
