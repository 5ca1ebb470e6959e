"""
Glassdoor real-time API client (via RapidAPI).

Fetches interview experiences and headline company ratings. Every public
method degrades to an empty result when credentials are missing or the
provider fails, so callers never need their own error handling.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.core.api_errors import APIError
from app.core.config import get_settings
from app.core.http_client import RapidAPIClient

logger = logging.getLogger(__name__)


@dataclass
class GlassdoorInterview:
    id: str
    job_title: str
    company_name: str
    interview_date: str
    interview_type: str
    difficulty: str
    duration: str
    questions: List[str] = field(default_factory=list)
    experience: str = ""
    outcome: str = "Not specified"


@dataclass
class GlassdoorCompanyData:
    company_name: str
    overall_rating: float
    ceo_approval: float
    recommend_to_friend: float
    salary_estimate: Optional[Dict[str, Any]] = None


def _dig(data: Any, *keys: str) -> Any:
    """Walk nested dicts; None as soon as a level is missing or not a dict."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_interview(raw: Dict[str, Any], company_name: str, fallback_id: str = "") -> GlassdoorInterview:
    """Normalize one interview record, filling provider gaps with defaults."""
    raw_id = raw.get("id")
    return GlassdoorInterview(
        id=str(raw_id) if raw_id is not None else fallback_id,
        job_title=raw.get("jobTitle") or "Unknown",
        company_name=raw.get("companyName") or company_name,
        interview_date=raw.get("interviewDate") or "",
        interview_type=raw.get("interviewType") or "Unknown",
        difficulty=raw.get("difficulty") or "Not specified",
        duration=raw.get("duration") or "Unknown",
        questions=list(raw.get("questions") or []),
        experience=raw.get("experience") or "",
        outcome=raw.get("outcome") or "Not specified",
    )


def parse_company(raw: Dict[str, Any], company_name: str) -> GlassdoorCompanyData:
    estimate = raw.get("salaryEstimate")
    return GlassdoorCompanyData(
        company_name=raw.get("name") or company_name,
        overall_rating=_to_float(raw.get("overallRating")),
        ceo_approval=_to_float(raw.get("ceoApproval")),
        recommend_to_friend=_to_float(raw.get("recommendToFriend")),
        salary_estimate={
            "min": estimate.get("min") or 0,
            "max": estimate.get("max") or 0,
            "currency": estimate.get("currency") or "USD",
        } if estimate else None,
    )


class GlassdoorClient(RapidAPIClient):
    """Client for the RapidAPI-hosted Glassdoor real-time API."""

    SOURCE_NAME = "glassdoor"

    def __init__(self, api_key: Optional[str] = None, host: Optional[str] = None, **kwargs):
        settings = get_settings()
        super().__init__(api_key=api_key or settings.get_glassdoor_api_key(), **kwargs)
        self.RAPIDAPI_HOST = host or settings.rapidapi_glassdoor_host
        self.BASE_URL = f"https://{self.RAPIDAPI_HOST}"

    async def fetch_company_interviews(self, company_name: str) -> List[GlassdoorInterview]:
        """Interview experiences for a company, or [] on any failure."""
        if not self.is_configured:
            logger.warning("[Glassdoor] API credentials not configured")
            return []

        try:
            data = await self.get(
                "/companies/interviews",
                params={"companyName": company_name},
                resource_id=f"interviews:{company_name}",
            )
        except APIError as e:
            logger.warning(f"[Glassdoor] Failed to fetch interviews for {company_name}: {e}")
            return []

        interviews = _dig(data, "data", "employerInterviews", "interviews") or []
        return [parse_interview(raw, company_name) for raw in interviews if isinstance(raw, dict)]

    async def fetch_interview_details(self, interview_id: str) -> Optional[GlassdoorInterview]:
        if not self.is_configured:
            logger.warning("[Glassdoor] API credentials not configured")
            return None

        try:
            data = await self.get(
                "/companies/interview-details",
                params={"interviewId": interview_id},
                resource_id=f"interview:{interview_id}",
            )
        except APIError as e:
            logger.warning(f"[Glassdoor] Failed to fetch interview {interview_id}: {e}")
            return None

        detail = _dig(data, "data")
        if not isinstance(detail, dict) or not detail:
            return None
        return parse_interview(detail, company_name="Unknown", fallback_id=interview_id)

    async def fetch_company_data(self, company_name: str) -> Optional[GlassdoorCompanyData]:
        """Headline ratings for the first matching company, or None."""
        if not self.is_configured:
            logger.warning("[Glassdoor] API credentials not configured")
            return None

        try:
            data = await self.get(
                "/companies",
                params={"companyName": company_name},
                resource_id=f"company:{company_name}",
            )
        except APIError as e:
            logger.warning(f"[Glassdoor] Failed to fetch company data for {company_name}: {e}")
            return None

        matches = _dig(data, "data")
        if not isinstance(matches, list) or not matches or not isinstance(matches[0], dict):
            return None
        return parse_company(matches[0], company_name)
