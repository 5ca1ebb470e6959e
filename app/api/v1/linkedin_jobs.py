"""
Job search endpoints.

/search is backed by JSearch and fails with 502 when the provider is
unavailable or unconfigured. The LinkedIn endpoints degrade to empty
results instead.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.core.api_errors import APIError
from app.core.config import MissingAPIKeyError
from app.sources.jsearch import JSearchClient, JSearchQuery
from app.sources.linkedin_jobs import LinkedInJobsClient, LinkedInJobSearchParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/linkedin-jobs", tags=["job search"])


@router.get("/search")
async def search_jobs(
    query: str = Query("software engineer jobs"),
    page: int = Query(1, ge=1),
    num_pages: int = Query(1, ge=1, le=10),
    country: str = Query("us", min_length=2, max_length=2),
    date_posted: str = Query("all", pattern="^(all|today|3days|week|month)$"),
):
    """Job search through JSearch; returns the provider payload unchanged."""
    search = JSearchQuery(
        query=query, page=page, num_pages=num_pages, country=country, date_posted=date_posted
    )
    try:
        async with JSearchClient() as client:
            return await client.search(search)
    except MissingAPIKeyError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except APIError as e:
        raise HTTPException(status_code=502, detail=f"Job search failed: {e.message}")


@router.get("/linkedin/search")
async def search_linkedin_jobs(
    title_filter: Optional[str] = Query(None),
    location_filter: Optional[str] = Query(None),
    description_filter: Optional[str] = Query(None),
    organization_filter: Optional[str] = Query(None),
    type_filter: Optional[str] = Query(None, description="FULL_TIME, CONTRACTOR, ..."),
    remote: Optional[bool] = Query(None),
    seniority_filter: Optional[str] = Query(None),
    industry_filter: Optional[str] = Query(None),
    date_filter: Optional[str] = Query(None),
    employees_gte: Optional[int] = Query(None, ge=0),
    employees_lte: Optional[int] = Query(None, ge=0),
    include_ai: Optional[bool] = Query(None),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    params = LinkedInJobSearchParams(
        title_filter=title_filter,
        location_filter=location_filter,
        description_filter=description_filter,
        organization_filter=organization_filter,
        type_filter=type_filter,
        remote=remote,
        seniority_filter=seniority_filter,
        industry_filter=industry_filter,
        date_filter=date_filter,
        employees_gte=employees_gte,
        employees_lte=employees_lte,
        include_ai=include_ai,
        limit=limit,
        offset=offset,
    )
    async with LinkedInJobsClient() as client:
        return await client.search(params)


@router.get("/{job_id}")
async def get_linkedin_job(job_id: str):
    async with LinkedInJobsClient() as client:
        job = await client.job_details(job_id)
    if not job:
        raise HTTPException(status_code=404, detail=f"Job {job_id} not found")
    return job.to_dict()
