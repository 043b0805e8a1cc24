"""Menu item and category API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from restaurant_hub.core.config import settings
from restaurant_hub.schemas.common import Money, NonEmptyStr, reject_null


class MenuCategoryCreate(BaseModel):
    """Payload for creating a menu category."""

    restaurant_id: int
    name: NonEmptyStr
    description: str | None = None
    display_order: int = 0


class MenuCategoryUpdate(BaseModel):
    name: NonEmptyStr | None = None
    description: str | None = None
    display_order: int | None = None
    is_active: bool | None = None

    @field_validator("name", "display_order", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class MenuCategoryRead(BaseModel):
    id: int
    restaurant_id: int
    name: str
    description: str | None
    display_order: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MenuCategorySummary(BaseModel):
    id: int
    name: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class MenuItemCreate(BaseModel):
    """Payload for creating a menu item."""

    restaurant_id: int
    category_id: int
    name: NonEmptyStr
    description: str | None = None
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    currency: str = settings.default_currency
    image_url: str | None = None
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    preparation_time: int | None = Field(default=None, ge=0)
    calories: int | None = Field(default=None, ge=0)
    allergens: list[str] = Field(default_factory=list)


class MenuItemUpdate(BaseModel):
    """Partial update; restaurant ownership of an item never changes."""

    category_id: int | None = None
    name: NonEmptyStr | None = None
    description: str | None = None
    price: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    currency: str | None = None
    image_url: str | None = None
    is_available: bool | None = None
    is_vegetarian: bool | None = None
    is_vegan: bool | None = None
    is_gluten_free: bool | None = None
    preparation_time: int | None = Field(default=None, ge=0)
    calories: int | None = Field(default=None, ge=0)
    allergens: list[str] | None = None

    @field_validator(
        "category_id",
        "name",
        "price",
        "currency",
        "is_available",
        "is_vegetarian",
        "is_vegan",
        "is_gluten_free",
        "allergens",
    )
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class MenuItemRead(BaseModel):
    """Serialized menu item."""

    id: int
    restaurant_id: int
    category_id: int
    name: str
    description: str | None
    price: Money
    currency: str
    image_url: str | None
    is_available: bool
    is_vegetarian: bool
    is_vegan: bool
    is_gluten_free: bool
    preparation_time: int | None
    calories: int | None
    allergens: list[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MenuItemListing(MenuItemRead):
    """Menu item row joined with its restaurant and category names."""

    restaurant_name: str | None = None
    category_name: str | None = None


class RestaurantContact(BaseModel):
    id: int
    name: str
    phone: str | None = None
    whatsapp: str | None = None

    model_config = ConfigDict(from_attributes=True)


class MenuItemDetail(MenuItemRead):
    category: MenuCategorySummary
    restaurant: RestaurantContact


class MenuItemSummary(BaseModel):
    """Compact item embedded in categories, carts and orders."""

    id: int
    name: str
    description: str | None = None
    price: Money
    currency: str
    image_url: str | None = None
    is_available: bool
    preparation_time: int | None = None
    calories: int | None = None
    allergens: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
