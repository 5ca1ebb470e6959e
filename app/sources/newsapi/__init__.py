"""
NewsAPI news source module.
"""

from app.sources.newsapi.client import NewsAPIClient

__all__ = ["NewsAPIClient"]
