"""User and address schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator

from restaurant_hub.schemas.common import NonEmptyStr, reject_null


class UserRead(BaseModel):
    """Public user fields; never includes the password hash."""

    id: int
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    phone: str | None = None

    model_config = ConfigDict(from_attributes=True)


class UserAdminUpdate(BaseModel):
    """Admin edit of a user account; omitted fields stay unchanged."""

    email: NonEmptyStr | None = None
    first_name: NonEmptyStr | None = None
    last_name: NonEmptyStr | None = None
    phone: str | None = None
    role: str | None = None
    is_active: bool | None = None


class UserStatusUpdate(BaseModel):
    is_active: StrictBool


class AddressCreate(BaseModel):
    address_type: str = "home"
    address_line1: NonEmptyStr
    address_line2: str | None = None
    city: NonEmptyStr
    state: str | None = None
    postal_code: str | None = None
    country: str = "Ghana"
    is_default: bool = False


class AddressUpdate(BaseModel):
    address_type: NonEmptyStr | None = None
    address_line1: NonEmptyStr | None = None
    address_line2: str | None = None
    city: NonEmptyStr | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    is_default: bool | None = None

    @field_validator("address_type", "address_line1", "city", "country", "is_default")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class AddressRead(AddressCreate):
    id: int
    user_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
