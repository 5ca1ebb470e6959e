"""
Job opening and news persistence.

Both tables are caches filled by seed scripts, external fetches and
admin inserts; reads are newest-first.
"""

import logging
from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.models import CompanyNews, JobOpening

logger = logging.getLogger(__name__)


@dataclass
class NewJobOpening:
    company_id: int
    job_title: str
    department: Optional[str] = None
    location: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    job_url: Optional[str] = None
    posted_date: Optional[date] = None
    source: Optional[str] = None


@dataclass
class NewNewsItem:
    headline: str
    company_id: Optional[int] = None
    industry_category: Optional[str] = None
    summary: Optional[str] = None
    source_url: Optional[str] = None
    source_name: Optional[str] = None
    sentiment: Optional[str] = None
    relevance_score: Optional[float] = None
    published_date: Optional[datetime] = None


class JobOpeningService:

    def __init__(self, db: Session):
        self.db = db

    def get_job_openings(self, company_id: int) -> List[JobOpening]:
        return (
            self.db.query(JobOpening)
            .filter(JobOpening.company_id == company_id)
            .order_by(JobOpening.posted_date.desc(), JobOpening.id.desc())
            .all()
        )

    def add_job_opening(self, job: NewJobOpening) -> JobOpening:
        record = JobOpening(**asdict(job))
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record


class NewsService:

    def __init__(self, db: Session):
        self.db = db

    def get_company_news(self, company_id: int, limit: int = 10) -> List[CompanyNews]:
        return (
            self.db.query(CompanyNews)
            .filter(CompanyNews.company_id == company_id)
            .order_by(CompanyNews.published_date.desc(), CompanyNews.id.desc())
            .limit(limit)
            .all()
        )

    def get_industry_news(self, category: str, limit: int = 10) -> List[CompanyNews]:
        return (
            self.db.query(CompanyNews)
            .filter(CompanyNews.industry_category == category)
            .order_by(CompanyNews.published_date.desc(), CompanyNews.id.desc())
            .limit(limit)
            .all()
        )

    def add_news(self, item: NewNewsItem) -> CompanyNews:
        values = asdict(item)
        if values["published_date"] is None:
            values["published_date"] = datetime.utcnow()
        record = CompanyNews(**values)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def add_many(self, items: List[NewNewsItem]) -> int:
        for item in items:
            values = asdict(item)
            if values["published_date"] is None:
                values["published_date"] = datetime.utcnow()
            self.db.add(CompanyNews(**values))
        self.db.commit()
        return len(items)
