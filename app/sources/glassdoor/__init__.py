"""
Glassdoor data source module.

Provides interview experiences and company ratings via RapidAPI.
"""

from app.sources.glassdoor.client import GlassdoorClient
from app.sources.glassdoor.ingest import GlassdoorCache

__all__ = ["GlassdoorClient", "GlassdoorCache"]
