"""
Saved comparison endpoints.

Every operation is scoped to the authenticated user; another user's
comparison is reported as not found.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.v1.auth import get_optional_user
from app.core.api_errors import NotAuthenticatedError
from app.core.database import get_db
from app.core.schemas import SavedComparisonResponse, to_dict, to_dicts
from app.users.favorites import ComparisonService

router = APIRouter(prefix="/comparisons", tags=["comparisons"])


class ComparisonCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    company_ids: List[int] = Field(..., min_length=1)


class ComparisonUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    company_ids: Optional[List[int]] = Field(None, min_length=1)


def _user_id(user: Optional[dict]) -> Optional[int]:
    return user["user_id"] if user else None


@router.get("")
def list_comparisons(
    user: Optional[dict] = Depends(get_optional_user), db: Session = Depends(get_db)
):
    try:
        rows = ComparisonService(db).list_comparisons(_user_id(user))
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=e.message)
    return to_dicts(SavedComparisonResponse, rows)


@router.post("", status_code=201)
def save_comparison(
    request: ComparisonCreate,
    user: Optional[dict] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        comparison = ComparisonService(db).save_comparison(
            _user_id(user), request.name, request.company_ids
        )
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=e.message)
    return to_dict(SavedComparisonResponse, comparison)


@router.patch("/{comparison_id}")
def update_comparison(
    comparison_id: int,
    request: ComparisonUpdate,
    user: Optional[dict] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        comparison = ComparisonService(db).update_comparison(
            _user_id(user), comparison_id, name=request.name, company_ids=request.company_ids
        )
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=e.message)
    if comparison is None:
        raise HTTPException(status_code=404, detail=f"Comparison {comparison_id} not found")
    return to_dict(SavedComparisonResponse, comparison)


@router.delete("/{comparison_id}")
def delete_comparison(
    comparison_id: int,
    user: Optional[dict] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        deleted = ComparisonService(db).delete_comparison(_user_id(user), comparison_id)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=e.message)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Comparison {comparison_id} not found")
    return {"success": True}
