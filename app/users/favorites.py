"""
Favorites and saved comparisons.

User-owned records. Ownership is enforced here by always scoping queries
to the caller's user_id; there is no row-level security in the database.
Mutations without a user raise NotAuthenticatedError. Reads without a user
return empty results.
"""

import json
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.api_errors import NotAuthenticatedError
from app.core.models import Company, SavedComparison, UserFavorite

logger = logging.getLogger(__name__)


def _require_user(user_id: Optional[int]) -> int:
    if user_id is None:
        raise NotAuthenticatedError()
    return user_id


class FavoritesService:
    """Star and unstar companies."""

    def __init__(self, db: Session):
        self.db = db

    def list_favorites(self, user_id: Optional[int]) -> List[Company]:
        """Favorite companies, most recently added first."""
        if user_id is None:
            return []
        return (
            self.db.query(Company)
            .join(UserFavorite, UserFavorite.company_id == Company.id)
            .filter(UserFavorite.user_id == user_id)
            .order_by(UserFavorite.created_at.desc(), UserFavorite.id.desc())
            .all()
        )

    def is_favorite(self, user_id: Optional[int], company_id: int) -> bool:
        if user_id is None:
            return False
        return self._find(user_id, company_id) is not None

    def add_favorite(self, user_id: Optional[int], company_id: int) -> UserFavorite:
        """Idempotent: adding an existing favorite returns the existing row."""
        user_id = _require_user(user_id)
        existing = self._find(user_id, company_id)
        if existing:
            return existing
        favorite = UserFavorite(user_id=user_id, company_id=company_id)
        self.db.add(favorite)
        self.db.commit()
        self.db.refresh(favorite)
        return favorite

    def remove_favorite(self, user_id: Optional[int], company_id: int) -> bool:
        user_id = _require_user(user_id)
        deleted = (
            self.db.query(UserFavorite)
            .filter(UserFavorite.user_id == user_id, UserFavorite.company_id == company_id)
            .delete()
        )
        self.db.commit()
        return deleted > 0

    def _find(self, user_id: int, company_id: int) -> Optional[UserFavorite]:
        return (
            self.db.query(UserFavorite)
            .filter(UserFavorite.user_id == user_id, UserFavorite.company_id == company_id)
            .first()
        )


class ComparisonService:
    """Named comparison sets saved by a user."""

    def __init__(self, db: Session):
        self.db = db

    def list_comparisons(self, user_id: Optional[int]) -> List[SavedComparison]:
        user_id = _require_user(user_id)
        return (
            self.db.query(SavedComparison)
            .filter(SavedComparison.user_id == user_id)
            .order_by(SavedComparison.saved_at.desc(), SavedComparison.id.desc())
            .all()
        )

    def save_comparison(self, user_id: Optional[int], name: str, company_ids: List[int]) -> SavedComparison:
        user_id = _require_user(user_id)
        comparison = SavedComparison(
            user_id=user_id,
            name=name,
            company_ids=json.dumps(company_ids),
        )
        self.db.add(comparison)
        self.db.commit()
        self.db.refresh(comparison)
        logger.info(f"User {user_id} saved comparison {comparison.id} ({len(company_ids)} companies)")
        return comparison

    def update_comparison(
        self,
        user_id: Optional[int],
        comparison_id: int,
        name: Optional[str] = None,
        company_ids: Optional[List[int]] = None,
    ) -> Optional[SavedComparison]:
        """Returns None if the comparison does not exist or belongs to someone else."""
        user_id = _require_user(user_id)
        comparison = self._owned(user_id, comparison_id)
        if comparison is None:
            return None
        if name is not None:
            comparison.name = name
        if company_ids is not None:
            comparison.company_ids = json.dumps(company_ids)
        comparison.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(comparison)
        return comparison

    def delete_comparison(self, user_id: Optional[int], comparison_id: int) -> bool:
        user_id = _require_user(user_id)
        comparison = self._owned(user_id, comparison_id)
        if comparison is None:
            return False
        self.db.delete(comparison)
        self.db.commit()
        return True

    def _owned(self, user_id: int, comparison_id: int) -> Optional[SavedComparison]:
        return (
            self.db.query(SavedComparison)
            .filter(SavedComparison.id == comparison_id, SavedComparison.user_id == user_id)
            .first()
        )
