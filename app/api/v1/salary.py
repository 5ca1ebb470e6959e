"""
Salary insight endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.schemas import SalaryResponse, to_dicts
from app.services.salary import SalaryService, SalaryTrendFilters

router = APIRouter(prefix="/salary", tags=["salary"])


@router.get("/company/{company_id}")
def get_company_salaries(company_id: int, db: Session = Depends(get_db)):
    return to_dicts(SalaryResponse, SalaryService(db).by_company(company_id))


@router.get("/compare")
def compare_salaries(
    job_title: Optional[str] = Query(None),
    level: Optional[str] = Query(None),
    company_ids: Optional[List[int]] = Query(None),
    db: Session = Depends(get_db),
):
    """Exact job title / level matches across companies."""
    rows = SalaryService(db).compare(job_title=job_title, level=level, company_ids=company_ids)
    return to_dicts(SalaryResponse, rows)


@router.get("/stats")
def get_salary_stats(
    job_title: str = Query(..., min_length=1),
    level: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    """Total compensation distribution; null when no rows match."""
    return SalaryService(db).stats(job_title, level)


@router.get("/job-titles")
def get_job_titles(db: Session = Depends(get_db)):
    return SalaryService(db).job_titles()


@router.get("/levels")
def get_levels(db: Session = Depends(get_db)):
    return SalaryService(db).levels()


@router.get("/trends")
def get_salary_trends(
    job_title: Optional[str] = Query(None, description="Case-insensitive substring"),
    level: Optional[str] = Query(None),
    min_salary: Optional[int] = Query(None, ge=0),
    max_salary: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
):
    filters = SalaryTrendFilters(
        job_title=job_title, level=level, min_salary=min_salary, max_salary=max_salary
    )
    return SalaryService(db).trends(filters)


@router.get("/range")
def get_salary_range(
    job_title: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    return SalaryService(db).range_by_role(job_title)
