"""
Authentication API endpoints.

Registration, login and the current-user profile. The get_current_user and
get_optional_user dependencies are shared by the user-owned routers.
"""

from fastapi import APIRouter, HTTPException, Header, Depends
from pydantic import BaseModel, Field, EmailStr
from sqlalchemy.orm import Session
from typing import Optional

from app.core.database import get_db
from app.users.auth import AuthService, MIN_PASSWORD_LENGTH

router = APIRouter(prefix="/auth", tags=["auth"])


# Request/Response Models


class RegisterRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, description="Password (min 8 characters)"
    )
    name: Optional[str] = Field(None, max_length=255, description="User's full name")


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


# Helpers to extract the user from the Authorization header


def _bearer_token(authorization: str) -> str:
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization format")
    return authorization[7:]


def get_current_user(
    authorization: Optional[str] = Header(None), db: Session = Depends(get_db)
) -> dict:
    """Extract and validate JWT token from Authorization header."""
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header required")

    try:
        return AuthService(db).verify_token(_bearer_token(authorization))
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))


def get_optional_user(
    authorization: Optional[str] = Header(None), db: Session = Depends(get_db)
) -> Optional[dict]:
    """Like get_current_user, but an absent header yields None."""
    if not authorization:
        return None
    return get_current_user(authorization, db)


# Endpoints


@router.post("/register")
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user account."""
    try:
        return AuthService(db).register(
            email=request.email, password=request.password, name=request.name
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login")
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Login and receive access token."""
    try:
        return AuthService(db).login(email=request.email, password=request.password)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.get("/me")
def get_current_user_profile(
    current_user: dict = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Get current user's profile."""
    user = AuthService(db).get_profile(current_user["user_id"])
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
