"""
Anonymous company review endpoints.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.models import Company
from app.core.schemas import AnonymousReviewResponse, to_dict, to_dicts
from app.services.reviews import ReviewService, ReviewSubmission

router = APIRouter(prefix="/reviews", tags=["reviews"])


class ReviewCreate(BaseModel):
    company_id: int
    rating: int = Field(..., ge=1, le=5)
    title: Optional[str] = Field(None, max_length=255)
    review_text: Optional[str] = None
    pros: Optional[str] = None
    cons: Optional[str] = None
    job_title: Optional[str] = Field(None, max_length=255)
    employment_status: Optional[Literal["current", "former", "interviewing"]] = None
    work_life_balance: Optional[int] = Field(None, ge=1, le=5)
    compensation_benefits: Optional[int] = Field(None, ge=1, le=5)
    career_opportunities: Optional[int] = Field(None, ge=1, le=5)
    culture_values: Optional[int] = Field(None, ge=1, le=5)
    senior_management: Optional[int] = Field(None, ge=1, le=5)


@router.post("", status_code=201)
def submit_review(request: ReviewCreate, db: Session = Depends(get_db)):
    if not db.query(Company).filter(Company.id == request.company_id).first():
        raise HTTPException(status_code=404, detail=f"Company {request.company_id} not found")
    review = ReviewService(db).submit_review(ReviewSubmission(**request.model_dump()))
    return to_dict(AnonymousReviewResponse, review)


@router.get("/company/{company_id}")
def get_company_reviews(
    company_id: int,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """Newest reviews first."""
    reviews = ReviewService(db).get_company_reviews(company_id, limit=limit, offset=offset)
    return to_dicts(AnonymousReviewResponse, reviews)


@router.get("/company/{company_id}/stats")
def get_review_stats(company_id: int, db: Session = Depends(get_db)):
    """Review count and averages; null when the company has no reviews."""
    return ReviewService(db).get_review_stats(company_id)


@router.post("/{review_id}/flag")
def flag_review(review_id: int, db: Session = Depends(get_db)):
    if not ReviewService(db).flag_review(review_id):
        raise HTTPException(status_code=404, detail=f"Review {review_id} not found")
    return {"success": True}
