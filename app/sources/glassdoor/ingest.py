"""
Glassdoor fetch-and-cache.

Pulls interviews and company metrics from the Glassdoor API and stores
them locally. Interviews are keyed by their Glassdoor id and metrics by
company, so repeated refreshes update rows instead of duplicating them.
"""

import json
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.models import GlassdoorMetrics, InterviewData
from app.sources.glassdoor.client import GlassdoorClient, GlassdoorInterview

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


class GlassdoorCache:
    """Local cache of Glassdoor interview and rating data."""

    def __init__(self, db: Session, client: Optional[GlassdoorClient] = None):
        self.db = db
        self.client = client

    async def fetch_and_cache(self, company_id: int, company_name: str) -> Dict[str, Any]:
        """
        Refresh cached Glassdoor data for one company.

        Returns:
            {"success": True, "interviews_count": n} or
            {"success": False, "error": "Failed to fetch Glassdoor data"}
        """
        client = self.client or GlassdoorClient()
        try:
            interviews = await client.fetch_company_interviews(company_name)
            for interview in interviews:
                self._upsert_interview(company_id, interview)

            company_data = await client.fetch_company_data(company_name)
            if company_data:
                estimate = company_data.salary_estimate or {}
                self._upsert_metrics(
                    company_id,
                    company_name=company_name,
                    overall_rating=company_data.overall_rating or None,
                    ceo_approval=company_data.ceo_approval or None,
                    recommend_to_friend=company_data.recommend_to_friend or None,
                    salary_min=estimate.get("min"),
                    salary_max=estimate.get("max"),
                    salary_currency=estimate.get("currency") or "USD",
                    interview_count=len(interviews),
                    last_synced_at=datetime.utcnow(),
                )

            self.db.commit()
            logger.info(f"[Glassdoor] Cached {len(interviews)} interviews for {company_name}")
            return {"success": True, "interviews_count": len(interviews)}

        except Exception as e:
            self.db.rollback()
            logger.error(f"[Glassdoor] Error fetching and caching data: {e}")
            return {"success": False, "error": "Failed to fetch Glassdoor data"}

        finally:
            if self.client is None:
                await client.close()

    def _upsert_interview(self, company_id: int, interview: GlassdoorInterview) -> None:
        record = None
        if interview.id:
            record = (
                self.db.query(InterviewData)
                .filter(InterviewData.glassdoor_interview_id == interview.id)
                .first()
            )
        if record is None:
            record = InterviewData(glassdoor_interview_id=interview.id or None)
            self.db.add(record)

        record.company_id = company_id
        record.job_title = interview.job_title
        record.interview_type = interview.interview_type
        record.difficulty = interview.difficulty
        record.duration = interview.duration
        record.questions = json.dumps(interview.questions)
        record.experience = interview.experience
        record.outcome = interview.outcome
        record.interview_date = _parse_date(interview.interview_date)
        record.cached_at = datetime.utcnow()
        self.db.flush()

    def _upsert_metrics(self, company_id: int, **values) -> None:
        record = (
            self.db.query(GlassdoorMetrics)
            .filter(GlassdoorMetrics.company_id == company_id)
            .first()
        )
        if record is None:
            record = GlassdoorMetrics(company_id=company_id)
            self.db.add(record)
        for key, value in values.items():
            setattr(record, key, value)

    def get_company_interviews(self, company_id: int, limit: int = 20) -> List[InterviewData]:
        return (
            self.db.query(InterviewData)
            .filter(InterviewData.company_id == company_id)
            .order_by(InterviewData.created_at.desc(), InterviewData.id.desc())
            .limit(limit)
            .all()
        )

    def get_interviews_by_job_title(self, company_id: int, job_title: str, limit: int = 10) -> List[InterviewData]:
        return (
            self.db.query(InterviewData)
            .filter(InterviewData.company_id == company_id, InterviewData.job_title == job_title)
            .order_by(InterviewData.created_at.desc(), InterviewData.id.desc())
            .limit(limit)
            .all()
        )

    def get_metrics(self, company_id: int) -> Optional[GlassdoorMetrics]:
        return (
            self.db.query(GlassdoorMetrics)
            .filter(GlassdoorMetrics.company_id == company_id)
            .first()
        )
