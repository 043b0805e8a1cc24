"""Restaurant and review schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from restaurant_hub.schemas.common import NonEmptyStr, reject_null
from restaurant_hub.schemas.menu import MenuItemSummary


class RestaurantCreate(BaseModel):
    """Payload for registering a restaurant."""

    name: NonEmptyStr
    description: NonEmptyStr
    cuisine_type: NonEmptyStr
    address: str | None = None
    phone: str | None = None
    whatsapp: str | None = None
    email: str | None = None
    opening_hours: dict[str, Any] | None = None
    logo_url: str | None = None
    hero_image_url: str | None = None


class RestaurantUpdate(BaseModel):
    """Partial update; id, created_at and owner_id are not editable."""

    name: NonEmptyStr | None = None
    description: NonEmptyStr | None = None
    cuisine_type: NonEmptyStr | None = None
    address: str | None = None
    phone: str | None = None
    whatsapp: str | None = None
    email: str | None = None
    opening_hours: dict[str, Any] | None = None
    logo_url: str | None = None
    hero_image_url: str | None = None
    is_active: bool | None = None

    @field_validator("name", "description", "cuisine_type", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class RestaurantRead(BaseModel):
    id: int
    owner_id: int | None
    name: str
    description: str
    cuisine_type: str
    address: str | None
    phone: str | None
    whatsapp: str | None
    email: str | None
    opening_hours: dict[str, Any] | None
    logo_url: str | None
    hero_image_url: str | None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RestaurantListing(RestaurantRead):
    """Restaurant row enriched with review aggregates."""

    average_rating: float | None = None
    review_count: int = 0


class RestaurantImageRead(BaseModel):
    id: int
    image_url: str
    alt_text: str | None
    display_order: int
    is_hero: bool

    model_config = ConfigDict(from_attributes=True)


class CategoryWithItems(BaseModel):
    id: int
    name: str
    description: str | None
    display_order: int
    menu_items: list[MenuItemSummary]

    model_config = ConfigDict(from_attributes=True)


class RestaurantDetail(RestaurantRead):
    menu_categories: list[CategoryWithItems]
    restaurant_images: list[RestaurantImageRead]


class RestaurantSummary(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ReviewerSummary(BaseModel):
    id: int
    first_name: str
    last_name: str

    model_config = ConfigDict(from_attributes=True)


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str | None = None
    order_id: int | None = None


class ReviewRead(BaseModel):
    id: int
    user_id: int
    restaurant_id: int
    order_id: int | None
    rating: int
    comment: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RestaurantReview(ReviewRead):
    user: ReviewerSummary


class UserReview(ReviewRead):
    restaurant: RestaurantSummary
