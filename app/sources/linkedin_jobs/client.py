"""
LinkedIn Job Search API client (via RapidAPI).

Search supports the provider's full filter set; responses are reshaped into
LinkedInJob records. Failures degrade to an empty job list / None.
"""

import logging
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, List, Optional

from app.core.api_errors import APIError
from app.core.config import get_settings
from app.core.http_client import RapidAPIClient

logger = logging.getLogger(__name__)

MAX_RESULTS_PER_PAGE = 100


@dataclass
class LinkedInJobSearchParams:
    """Query filters accepted by the /search endpoint. None means unset."""

    title_filter: Optional[str] = None
    location_filter: Optional[str] = None
    description_filter: Optional[str] = None
    organization_description_filter: Optional[str] = None
    organization_specialties_filter: Optional[str] = None
    organization_slug_filter: Optional[str] = None
    type_filter: Optional[str] = None  # CONTRACTOR, FULL_TIME, INTERN, PART_TIME, ...
    description_type: Optional[str] = None
    remote: Optional[bool] = None
    industry_filter: Optional[str] = None
    seniority_filter: Optional[str] = None
    agency: Optional[bool] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    date_filter: Optional[str] = None
    directapply: Optional[bool] = None
    employees_gte: Optional[int] = None
    employees_lte: Optional[int] = None
    order: Optional[str] = None
    advanced_title_filter: Optional[str] = None
    include_ai: Optional[bool] = None
    ai_work_arrangement_filter: Optional[str] = None
    ai_experience_level_filter: Optional[str] = None
    ai_visa_sponsorship_filter: Optional[bool] = None
    organization_filter: Optional[str] = None

    def to_query(self) -> Dict[str, str]:
        """Provider query string. Falsy numbers are dropped, booleans are lowercased."""
        query = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, bool):
                # include_ai / ai_visa_sponsorship_filter are only sent when true
                if not value and f.name in ("include_ai", "ai_visa_sponsorship_filter"):
                    continue
                query[f.name] = "true" if value else "false"
            elif isinstance(value, int):
                if not value:
                    continue
                if f.name == "limit":
                    value = min(value, MAX_RESULTS_PER_PAGE)
                query[f.name] = str(value)
            elif value:
                query[f.name] = value
        return query


@dataclass
class LinkedInJob:
    job_id: Optional[str]
    title: Optional[str]
    company: Optional[str]
    location: Optional[str]
    job_type: Optional[str]
    seniority_level: Optional[str] = None
    posted_date: Optional[str] = None
    description: Optional[str] = None
    apply_url: Optional[str] = None
    company_logo_url: Optional[str] = None
    remote: Optional[bool] = None
    ai_work_arrangement: Optional[str] = None
    ai_experience_level: Optional[str] = None
    ai_visa_sponsorship: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_job(raw: Dict[str, Any]) -> LinkedInJob:
    job_id = raw.get("job_id") or raw.get("id")
    return LinkedInJob(
        job_id=str(job_id) if job_id is not None else None,
        title=raw.get("job_title") or raw.get("title"),
        company=raw.get("company_name") or raw.get("company"),
        location=raw.get("job_location") or raw.get("location"),
        job_type=raw.get("job_employment_type") or raw.get("type"),
        seniority_level=raw.get("seniority_level"),
        posted_date=raw.get("job_posted_date"),
        description=raw.get("job_description"),
        apply_url=raw.get("job_apply_link") or raw.get("apply_url"),
        company_logo_url=raw.get("company_logo_url"),
        remote=raw.get("job_is_remote"),
        ai_work_arrangement=raw.get("ai_work_arrangement"),
        ai_experience_level=raw.get("ai_experience_level"),
        ai_visa_sponsorship=raw.get("ai_visa_sponsorship"),
    )


class LinkedInJobsClient(RapidAPIClient):
    """Client for linkedin-job-search-api on RapidAPI."""

    SOURCE_NAME = "linkedin_jobs"
    RAPIDAPI_HOST = "linkedin-job-search-api.p.rapidapi.com"
    BASE_URL = f"https://{RAPIDAPI_HOST}"

    def __init__(self, api_key: Optional[str] = None, **kwargs):
        super().__init__(api_key=api_key or get_settings().get_linkedin_jobs_api_key(), **kwargs)

    async def search(self, params: LinkedInJobSearchParams) -> Dict[str, Any]:
        """
        Search LinkedIn postings.

        Returns:
            {"jobs": [...], "total_count": ..., "has_more": ...}; {"jobs": []} on failure
        """
        if not self.is_configured:
            logger.warning(
                "[LinkedIn Jobs] API key not configured. "
                "Please set RAPIDAPI_LINKEDIN_JOBS_KEY environment variable."
            )
            return {"jobs": []}

        try:
            data = await self.get("/search", params=params.to_query(), resource_id="search")
        except APIError as e:
            logger.error(f"[LinkedIn Jobs] Error searching jobs: {e}")
            return {"jobs": []}

        if not isinstance(data, dict):
            return {"jobs": []}

        jobs: List[Dict[str, Any]] = [
            parse_job(raw).to_dict() for raw in (data.get("data") or []) if isinstance(raw, dict)
        ]
        return {
            "jobs": jobs,
            "total_count": data.get("total_count"),
            "has_more": data.get("has_more"),
        }

    async def job_details(self, job_id: str) -> Optional[LinkedInJob]:
        if not self.is_configured:
            logger.warning("[LinkedIn Jobs] API key not configured")
            return None

        try:
            data = await self.get(f"/job/{job_id}", resource_id=f"job:{job_id}")
        except APIError as e:
            logger.error(f"[LinkedIn Jobs] Error fetching job details: {e}")
            return None

        return parse_job(data) if isinstance(data, dict) else None
