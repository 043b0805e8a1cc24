"""Security utilities for password hashing and JWT-based auth."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from restaurant_hub.core.config import settings
from restaurant_hub.core.errors import ApiError
from restaurant_hub.db.session import get_db
from restaurant_hub.models.user import User

logger = logging.getLogger(__name__)

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme: HTTPBearer = HTTPBearer(auto_error=False)

ACCESS_TOKEN_TYPE = "access"
RESET_TOKEN_TYPE = "password_reset"


class TokenExpiredError(Exception):
    """Raised when a JWT signature is valid but its ``exp`` has passed."""


class InvalidTokenError(Exception):
    """Raised when a JWT cannot be decoded or carries the wrong claims."""


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def _encode(claims: dict[str, Any], expires_in: timedelta) -> str:
    to_encode: dict[str, Any] = claims.copy()
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_in})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(user: User) -> str:
    """Create a signed JWT access token for a user."""
    return _encode(
        {"sub": str(user.id), "email": user.email, "role": user.role, "type": ACCESS_TOKEN_TYPE},
        timedelta(minutes=settings.jwt_expire_minutes),
    )


def create_reset_token(user: User) -> str:
    """Create a short-lived password reset token."""
    return _encode(
        {"sub": str(user.id), "type": RESET_TOKEN_TYPE},
        timedelta(minutes=settings.reset_token_expire_minutes),
    )


def decode_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> int:
    """Decode a JWT and return the user id it was issued for."""
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError as exc:
        raise TokenExpiredError from exc
    except JWTError as exc:
        raise InvalidTokenError from exc

    if payload.get("type") != expected_type:
        raise InvalidTokenError
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidTokenError from exc


def _unauthorized(message: str) -> ApiError:
    return ApiError(status.HTTP_401_UNAUTHORIZED, message)


def resolve_token_user(db: Session, token: str) -> User:
    """Return the active user behind an access token or raise a 401."""
    try:
        user_id = decode_token(token)
    except TokenExpiredError as exc:
        raise _unauthorized("Token expired") from exc
    except InvalidTokenError as exc:
        raise _unauthorized("Invalid token") from exc

    user: User | None = db.get(User, user_id)
    if user is None:
        raise _unauthorized("Invalid token - user not found")
    if not user.is_active:
        raise _unauthorized("Account is deactivated")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the authenticated user from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Access token required")
    return resolve_token_user(db, credentials.credentials)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Resolve the user when a valid token is sent; never fail the request."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return resolve_token_user(db, credentials.credentials)
    except ApiError as exc:
        logger.info("[AUTH] Optional auth ignored token: %s", exc.detail)
        return None
