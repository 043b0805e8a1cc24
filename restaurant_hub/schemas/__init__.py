"""Schema exports."""

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
from restaurant_hub.schemas.common import Envelope, MessageResponse, Money, PaginatedEnvelope, Pagination
from restaurant_hub.schemas.menu import (
    MenuCategoryCreate,
    MenuCategoryRead,
    MenuCategoryUpdate,
    MenuItemCreate,
    MenuItemDetail,
    MenuItemListing,
    MenuItemRead,
    MenuItemUpdate,
)
from restaurant_hub.schemas.order import (
    CartItemCreate,
    CartItemRead,
    CartItemUpdate,
    CartRead,
    OrderCreate,
    OrderCreated,
    OrderDetail,
    OrderRead,
    OrderStatusUpdate,
    OrderWithItems,
)
from restaurant_hub.schemas.restaurant import (
    RestaurantCreate,
    RestaurantDetail,
    RestaurantListing,
    RestaurantRead,
    RestaurantReview,
    RestaurantUpdate,
    ReviewCreate,
    ReviewRead,
    UserReview,
)
from restaurant_hub.schemas.user import (
    AddressCreate,
    AddressRead,
    AddressUpdate,
    UserAdminUpdate,
    UserRead,
    UserStatusUpdate,
)

__all__ = [
    "AuthPayload",
    "ChangePasswordRequest",
    "ForgotPasswordRequest",
    "ForgotPasswordResponse",
    "LoginRequest",
    "ProfileUpdate",
    "RegisterRequest",
    "ResetPasswordRequest",
    "Envelope",
    "MessageResponse",
    "Money",
    "PaginatedEnvelope",
    "Pagination",
    "MenuCategoryCreate",
    "MenuCategoryRead",
    "MenuCategoryUpdate",
    "MenuItemCreate",
    "MenuItemDetail",
    "MenuItemListing",
    "MenuItemRead",
    "MenuItemUpdate",
    "CartItemCreate",
    "CartItemRead",
    "CartItemUpdate",
    "CartRead",
    "OrderCreate",
    "OrderCreated",
    "OrderDetail",
    "OrderRead",
    "OrderStatusUpdate",
    "OrderWithItems",
    "RestaurantCreate",
    "RestaurantDetail",
    "RestaurantListing",
    "RestaurantRead",
    "RestaurantReview",
    "RestaurantUpdate",
    "ReviewCreate",
    "ReviewRead",
    "UserReview",
    "AddressCreate",
    "AddressRead",
    "AddressUpdate",
    "UserAdminUpdate",
    "UserRead",
    "UserStatusUpdate",
]
