"""Authentication endpoints (API JWT)."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from restaurant_hub.core.config import settings
from restaurant_hub.core.errors import ApiError
from restaurant_hub.core.security import (
    RESET_TOKEN_TYPE,
    InvalidTokenError,
    TokenExpiredError,
    create_access_token,
    create_reset_token,
    decode_token,
    get_current_user,
    get_password_hash,
    verify_password,
)
from restaurant_hub.db.session import get_db
from restaurant_hub.models.user import User, normalize_user_role
from restaurant_hub.schemas.auth import (
    AuthPayload,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    ResetPasswordRequest,
)
from restaurant_hub.schemas.common import Envelope, MessageResponse
from restaurant_hub.schemas.user import UserRead
from restaurant_hub.services import user_service

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
SELF_REGISTER_ROLES: set[str] = {"customer", "restaurant_owner"}


def _check_password_strength(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ApiError(
            status.HTTP_400_BAD_REQUEST,
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )


def _auth_payload(user: User) -> AuthPayload:
    return AuthPayload(user=UserRead.model_validate(user), token=create_access_token(user))


@router.post("/register", response_model=Envelope[AuthPayload], status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> Envelope[AuthPayload]:
    if not user_service.is_valid_email(payload.email):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid email format")
    _check_password_strength(payload.password)
    try:
        role = normalize_user_role(payload.role)
    except ValueError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid role") from exc
    if role not in SELF_REGISTER_ROLES:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid role")
    if user_service.get_user_by_email(db, payload.email) is not None:
        raise ApiError(status.HTTP_409_CONFLICT, "User with this email already exists")

    user = user_service.create_user(
        db,
        email=payload.email,
        hashed_password=get_password_hash(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        phone=payload.phone,
        role=role,
    )
    logger.info("[AUTH] Registered user_id=%s", user.id)
    return Envelope[AuthPayload](data=_auth_payload(user), message="User registered successfully")


@router.post("/login", response_model=Envelope[AuthPayload])
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> Envelope[AuthPayload]:
    user = user_service.authenticate_user(db, payload.email, payload.password)
    if user is None:
        logger.info("[AUTH] Failed login for %s", payload.email.lower())
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Invalid email or password")
    if not user.is_active:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Account is deactivated")
    user = user_service.record_login(db, user)
    return Envelope[AuthPayload](data=_auth_payload(user), message="Login successful")


@router.get("/profile", response_model=Envelope[UserRead])
def get_profile(current_user: User = Depends(get_current_user)) -> Envelope[UserRead]:
    return Envelope[UserRead](data=UserRead.model_validate(current_user), message="Profile retrieved successfully")


@router.put("/profile", response_model=Envelope[UserRead])
def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[UserRead]:
    user = user_service.update_profile(
        db,
        current_user,
        first_name=payload.first_name,
        last_name=payload.last_name,
        phone=payload.phone,
    )
    return Envelope[UserRead](data=UserRead.model_validate(user), message="Profile updated successfully")


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    _check_password_strength(payload.new_password)
    if not verify_password(payload.current_password, current_user.password_hash):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Current password is incorrect")
    user_service.set_password(db, current_user, get_password_hash(payload.new_password))
    return MessageResponse(message="Password changed successfully")


@router.post("/forgot-password", response_model=ForgotPasswordResponse)
def forgot_password(payload: ForgotPasswordRequest, db: Session = Depends(get_db)) -> ForgotPasswordResponse:
    message = "If an account with that email exists, a password reset link has been sent"
    user = user_service.get_user_by_email(db, payload.email)
    if user is None:
        return ForgotPasswordResponse(message=message)

    reset_token = create_reset_token(user)
    logger.info("[AUTH] Password reset requested for user_id=%s", user.id)
    return ForgotPasswordResponse(
        message=message,
        reset_token=reset_token if settings.app_env == "dev" else None,
    )


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(payload: ResetPasswordRequest, db: Session = Depends(get_db)) -> MessageResponse:
    _check_password_strength(payload.new_password)
    try:
        user_id = decode_token(payload.reset_token, expected_type=RESET_TOKEN_TYPE)
    except TokenExpiredError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Reset token has expired") from exc
    except InvalidTokenError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid reset token") from exc

    user = user_service.get_user_by_id(db, user_id)
    if user is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid reset token")
    user_service.set_password(db, user, get_password_hash(payload.new_password))
    return MessageResponse(message="Password reset successfully")


@router.post("/logout", response_model=MessageResponse)
def logout() -> MessageResponse:
    return MessageResponse(message="Logged out successfully")
