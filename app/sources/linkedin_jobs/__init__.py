"""
LinkedIn job postings via RapidAPI.
"""

from app.sources.linkedin_jobs.client import LinkedInJobsClient, LinkedInJobSearchParams

__all__ = ["LinkedInJobsClient", "LinkedInJobSearchParams"]
