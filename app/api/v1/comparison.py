"""
Side-by-side comparison endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.schemas import SalaryResponse, to_dicts
from app.services.comparison import ComparisonHelper

router = APIRouter(prefix="/comparison", tags=["comparison"])


@router.get("/data")
async def get_comparison_data(
    company_ids: List[int] = Query(..., description="Companies to compare"),
    db: Session = Depends(get_db),
):
    """Company, aggregate score, salaries, openings and recent news for each id."""
    return await ComparisonHelper(db).get_comparison_data(company_ids)


@router.get("/metrics")
def get_metrics_summary(
    company_ids: List[int] = Query(...),
    db: Session = Depends(get_db),
):
    return ComparisonHelper(db).get_company_metrics_summary(company_ids)


@router.get("/salary")
def get_salary_comparison(
    company_ids: List[int] = Query(...),
    job_title: str = Query(..., min_length=1),
    level: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    rows = ComparisonHelper(db).get_salary_comparison_for_role(company_ids, job_title, level)
    return to_dicts(SalaryResponse, rows)
