"""
Favorite company endpoints.

Reads without a token return empty results; mutations require one.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.v1.auth import get_optional_user
from app.core.api_errors import NotAuthenticatedError
from app.core.database import get_db
from app.core.models import Company
from app.core.schemas import CompanyResponse, to_dicts
from app.users.favorites import FavoritesService

router = APIRouter(prefix="/favorites", tags=["favorites"])


def _user_id(user: Optional[dict]) -> Optional[int]:
    return user["user_id"] if user else None


@router.get("")
def list_favorites(
    user: Optional[dict] = Depends(get_optional_user), db: Session = Depends(get_db)
):
    return to_dicts(CompanyResponse, FavoritesService(db).list_favorites(_user_id(user)))


@router.post("/{company_id}")
def add_favorite(
    company_id: int,
    user: Optional[dict] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        if not db.query(Company).filter(Company.id == company_id).first():
            raise HTTPException(status_code=404, detail=f"Company {company_id} not found")
        FavoritesService(db).add_favorite(_user_id(user), company_id)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=e.message)
    return {"success": True}


@router.delete("/{company_id}")
def remove_favorite(
    company_id: int,
    user: Optional[dict] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        removed = FavoritesService(db).remove_favorite(_user_id(user), company_id)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=e.message)
    return {"success": removed}


@router.get("/{company_id}/check")
def check_favorite(
    company_id: int,
    user: Optional[dict] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    return {"is_favorite": FavoritesService(db).is_favorite(_user_id(user), company_id)}
