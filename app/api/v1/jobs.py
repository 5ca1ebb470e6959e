"""
Job opening endpoints.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.models import Company
from app.core.schemas import JobOpeningResponse, to_dict, to_dicts
from app.services.listings import JobOpeningService, NewJobOpening

router = APIRouter(prefix="/jobs", tags=["jobs"])


class JobOpeningCreate(BaseModel):
    company_id: int
    job_title: str = Field(..., min_length=1, max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    job_url: Optional[str] = None
    posted_date: Optional[date] = None
    source: Optional[str] = Field(None, max_length=100)


@router.get("/company/{company_id}")
def get_job_openings(company_id: int, db: Session = Depends(get_db)):
    """Openings for a company, most recently posted first."""
    return to_dicts(JobOpeningResponse, JobOpeningService(db).get_job_openings(company_id))


@router.post("", status_code=201)
def add_job_opening(request: JobOpeningCreate, db: Session = Depends(get_db)):
    if not db.query(Company).filter(Company.id == request.company_id).first():
        raise HTTPException(status_code=404, detail=f"Company {request.company_id} not found")
    record = JobOpeningService(db).add_job_opening(NewJobOpening(**request.model_dump()))
    return to_dict(JobOpeningResponse, record)
