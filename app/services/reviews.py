"""
Anonymous review service.

Reviews are append-only. Moderation is a flag, never a delete.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.models import AnonymousReview, EmploymentStatus

logger = logging.getLogger(__name__)

SUB_RATINGS = (
    "work_life_balance",
    "compensation_benefits",
    "career_opportunities",
    "culture_values",
    "senior_management",
)


@dataclass
class ReviewSubmission:
    """Validated review input (range checks happen in the API schema)."""
    company_id: int
    rating: int
    title: Optional[str] = None
    review_text: Optional[str] = None
    pros: Optional[str] = None
    cons: Optional[str] = None
    job_title: Optional[str] = None
    employment_status: Optional[str] = None
    work_life_balance: Optional[int] = None
    compensation_benefits: Optional[int] = None
    career_opportunities: Optional[int] = None
    culture_values: Optional[int] = None
    senior_management: Optional[int] = None


def _format_average(value) -> Optional[str]:
    return None if value is None else f"{float(value):.2f}"


class ReviewService:
    """Submit, list, summarize and flag anonymous reviews."""

    def __init__(self, db: Session):
        self.db = db

    def submit_review(self, submission: ReviewSubmission) -> AnonymousReview:
        status = submission.employment_status
        review = AnonymousReview(
            company_id=submission.company_id,
            rating=submission.rating,
            title=submission.title,
            review_text=submission.review_text,
            pros=submission.pros,
            cons=submission.cons,
            job_title=submission.job_title,
            employment_status=EmploymentStatus(status) if status else None,
            work_life_balance=submission.work_life_balance,
            compensation_benefits=submission.compensation_benefits,
            career_opportunities=submission.career_opportunities,
            culture_values=submission.culture_values,
            senior_management=submission.senior_management,
        )
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        logger.info(f"Review {review.id} submitted for company {review.company_id}")
        return review

    def get_company_reviews(self, company_id: int, limit: int = 20, offset: int = 0) -> List[AnonymousReview]:
        """Newest first."""
        return (
            self.db.query(AnonymousReview)
            .filter(AnonymousReview.company_id == company_id)
            .order_by(AnonymousReview.created_at.desc(), AnonymousReview.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def get_review_stats(self, company_id: int) -> Optional[Dict[str, Any]]:
        """
        Review count and averages formatted to two decimals.

        Returns None when the company has no reviews.
        """
        columns = [func.count(AnonymousReview.id), func.avg(AnonymousReview.rating)]
        columns += [func.avg(getattr(AnonymousReview, name)) for name in SUB_RATINGS]

        row = (
            self.db.query(*columns)
            .filter(AnonymousReview.company_id == company_id)
            .one()
        )
        total = row[0] or 0
        if total == 0:
            return None

        stats = {"total_reviews": total, "avg_rating": _format_average(row[1])}
        for name, value in zip(SUB_RATINGS, row[2:]):
            stats[f"avg_{name}"] = _format_average(value)
        return stats

    def flag_review(self, review_id: int) -> bool:
        """Mark a review for moderation. Returns False if it does not exist."""
        review = self.db.query(AnonymousReview).filter(AnonymousReview.id == review_id).first()
        if not review:
            return False
        review.is_flagged = 1
        self.db.commit()
        logger.info(f"Review {review_id} flagged")
        return True
