"""Order and cart API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from restaurant_hub.schemas.common import Money, NonEmptyStr
from restaurant_hub.schemas.user import UserSummary


class OrderItemPayload(BaseModel):
    """Single order line payload."""

    menu_item_id: int
    quantity: int = Field(default=1, ge=1)
    special_instructions: str | None = None


class OrderCreate(BaseModel):
    """Place an order for one restaurant."""

    user_id: int | None = None
    restaurant_id: int
    order_type: str = "delivery"
    delivery_address: str | None = None
    delivery_instructions: str | None = None
    notes: str | None = None
    items: list[OrderItemPayload] = Field(min_length=1)


class OrderStatusUpdate(BaseModel):
    status: NonEmptyStr


class OrderRead(BaseModel):
    """Serialized order row."""

    id: int
    user_id: int
    restaurant_id: int
    order_number: str
    order_type: str
    status: str
    subtotal_amount: Money
    tax_amount: Money
    delivery_fee: Money
    total_amount: Money
    delivery_address: str | None
    delivery_instructions: str | None
    notes: str | None
    estimated_delivery_time: datetime | None
    actual_delivery_time: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderCreated(BaseModel):
    order: OrderRead
    order_number: str
    total_amount: Money


class OrderMenuItem(BaseModel):
    id: int
    name: str
    description: str | None = None
    image_url: str | None = None
    preparation_time: int | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderItemRead(BaseModel):
    id: int
    quantity: int
    unit_price: Money
    total_price: Money
    special_instructions: str | None
    menu_item: OrderMenuItem

    model_config = ConfigDict(from_attributes=True)


class OrderRestaurant(BaseModel):
    id: int
    name: str
    phone: str | None = None
    whatsapp: str | None = None
    address: str | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderWithItems(OrderRead):
    """Order listing row with restaurant contact and lines."""

    restaurant: OrderRestaurant
    order_items: list[OrderItemRead]


class OrderDetail(OrderWithItems):
    user: UserSummary


class CartItemCreate(BaseModel):
    user_id: int
    restaurant_id: int
    menu_item_id: int
    quantity: int = Field(default=1, ge=1)
    special_instructions: str | None = None


class CartItemUpdate(BaseModel):
    quantity: int
    special_instructions: str | None = None


class CartItemRead(BaseModel):
    id: int
    user_id: int
    restaurant_id: int
    menu_item_id: int
    quantity: int
    special_instructions: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CartMenuItem(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: Money
    currency: str
    image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CartRestaurant(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CartLine(CartItemRead):
    menu_item: CartMenuItem
    restaurant: CartRestaurant


class CartRead(BaseModel):
    items: list[CartLine]
    total: Money
