"""
JSearch job postings via RapidAPI.
"""

from app.sources.jsearch.client import JSearchClient, JSearchQuery

__all__ = ["JSearchClient", "JSearchQuery"]
