"""
User Authentication Service.

Email/password accounts with bcrypt hashes and JWT bearer tokens.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Dict, Any

import jwt
import bcrypt
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.models import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
LOGIN_METHOD = "password"


def _user_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role.value if user.role else None,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "last_signed_in": user.last_signed_in.isoformat() if user.last_signed_in else None,
    }


class AuthService:
    """User authentication service."""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def _hash_password(self, password: str) -> str:
        """Hash password with bcrypt."""
        salt = bcrypt.gensalt()
        return bcrypt.hashpw(password.encode(), salt).decode()

    def _verify_password(self, password: str, hashed: str) -> bool:
        """Verify password against hash."""
        return bcrypt.checkpw(password.encode(), hashed.encode())

    def _create_access_token(self, user: User) -> str:
        """Create JWT access token."""
        now = datetime.utcnow()
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "type": "access",
            "exp": now + timedelta(minutes=self.settings.access_token_expire_minutes),
            "iat": now,
        }
        return jwt.encode(payload, self.settings.jwt_secret_key, algorithm=self.settings.jwt_algorithm)

    def _token_response(self, user: User) -> Dict[str, Any]:
        return {
            "access_token": self._create_access_token(user),
            "token_type": "bearer",
            "expires_in": self.settings.access_token_expire_minutes * 60,
            "user": _user_dict(user),
        }

    def register(self, email: str, password: str, name: Optional[str] = None) -> Dict[str, Any]:
        """Register a new user."""
        email = email.lower()
        if self.db.query(User).filter(User.email == email).first():
            raise ValueError("Email already registered")

        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        user = User(
            open_id=f"local:{email}"[:64],
            email=email,
            name=name,
            password_hash=self._hash_password(password),
            login_method=LOGIN_METHOD,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return self._token_response(user)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Authenticate user and return a token."""
        user = self.db.query(User).filter(User.email == email.lower()).first()
        if not user or not user.password_hash:
            raise ValueError("Invalid email or password")

        if not self._verify_password(password, user.password_hash):
            raise ValueError("Invalid email or password")

        user.last_signed_in = datetime.utcnow()
        self.db.commit()

        return self._token_response(user)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify JWT and return user info."""
        try:
            payload = jwt.decode(
                token, self.settings.jwt_secret_key, algorithms=[self.settings.jwt_algorithm]
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError:
            raise ValueError("Invalid token")

        if payload.get("type") != "access":
            raise ValueError("Invalid token type")

        user = self.get_user(int(payload["sub"]))
        if not user:
            raise ValueError("User not found")

        return {"user_id": user.id, "email": user.email, "name": user.name}

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_profile(self, user_id: int) -> Optional[Dict[str, Any]]:
        user = self.get_user(user_id)
        return _user_dict(user) if user else None
