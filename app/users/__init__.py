"""
Users module for account and user-owned features.

Accounts and tokens, favorite companies, saved comparisons.
"""

from app.users.auth import AuthService
from app.users.favorites import ComparisonService, FavoritesService

__all__ = ["AuthService", "ComparisonService", "FavoritesService"]
