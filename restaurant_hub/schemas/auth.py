"""Authentication-related request and response schemas."""

from pydantic import BaseModel, Field

from restaurant_hub.schemas.common import NonEmptyStr
from restaurant_hub.schemas.user import UserRead


class RegisterRequest(BaseModel):
    """Payload for user registration."""

    email: NonEmptyStr
    password: str = Field(min_length=1)
    first_name: NonEmptyStr
    last_name: NonEmptyStr
    phone: str | None = None
    role: str = "customer"


class LoginRequest(BaseModel):
    """Payload for user login."""

    email: NonEmptyStr
    password: str = Field(min_length=1)


class AuthPayload(BaseModel):
    """User snapshot plus bearer token returned by register/login."""

    user: UserRead
    token: str


class ProfileUpdate(BaseModel):
    first_name: NonEmptyStr
    last_name: NonEmptyStr
    phone: str | None = None


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=1)


class ForgotPasswordRequest(BaseModel):
    email: NonEmptyStr


class ForgotPasswordResponse(BaseModel):
    success: bool = True
    message: str
    reset_token: str | None = None


class ResetPasswordRequest(BaseModel):
    reset_token: NonEmptyStr
    new_password: str = Field(min_length=1)
