"""Order and cart endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from restaurant_hub.core.errors import ApiError
from restaurant_hub.core.security import get_current_user
from restaurant_hub.db.session import get_db
from restaurant_hub.models import CartItem, Order, User
from restaurant_hub.schemas.common import Envelope, MessageResponse, PaginatedEnvelope
from restaurant_hub.schemas.order import (
    CartItemCreate,
    CartItemRead,
    CartItemUpdate,
    CartLine,
    CartRead,
    OrderCreate,
    OrderCreated,
    OrderDetail,
    OrderRead,
    OrderStatusUpdate,
    OrderWithItems,
)
from restaurant_hub.services import cart_service, order_service, user_service
from restaurant_hub.services.cart_service import CartItemUnavailableError
from restaurant_hub.services.order_service import OrderValidationError, StatusTransitionError
from restaurant_hub.services.pagination import paginate
from restaurant_hub.services.security_guards import (
    ensure_owner_or_admin,
    ensure_restaurant_access,
    ensure_self_or_admin,
    is_admin,
)

router: APIRouter = APIRouter()


def _can_view_order(user: User, order: Order) -> bool:
    if is_admin(user) or order.user_id == user.id:
        return True
    return order.restaurant is not None and order.restaurant.owner_id == user.id


def _ensure_target_user(db: Session, current_user: User, user_id: int) -> None:
    ensure_self_or_admin(current_user, user_id)
    if user_id != current_user.id and user_service.get_user_by_id(db, user_id) is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found")


def _get_cart_line(db: Session, user: User, cart_item_id: int) -> CartItem:
    line = cart_service.get_cart_item(db, cart_item_id)
    if line is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Cart item not found")
    return ensure_owner_or_admin(user, line)


@router.get("/cart/{user_id}", response_model=Envelope[CartRead])
def get_cart(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[CartRead]:
    ensure_self_or_admin(current_user, user_id)
    lines = cart_service.get_cart_lines(db, user_id)
    cart = CartRead(
        items=[CartLine.model_validate(line) for line in lines],
        total=cart_service.cart_total(lines),
    )
    return Envelope[CartRead](data=cart, message="Cart retrieved successfully")


@router.post("/cart", response_model=Envelope[CartItemRead], status_code=status.HTTP_201_CREATED)
def add_to_cart(
    payload: CartItemCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[CartItemRead]:
    _ensure_target_user(db, current_user, payload.user_id)
    try:
        line, created = cart_service.add_to_cart(
            db,
            user_id=payload.user_id,
            restaurant_id=payload.restaurant_id,
            menu_item_id=payload.menu_item_id,
            quantity=payload.quantity,
            special_instructions=payload.special_instructions,
        )
    except CartItemUnavailableError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc)) from exc

    if not created:
        response.status_code = status.HTTP_200_OK
        return Envelope[CartItemRead](data=CartItemRead.model_validate(line), message="Cart item quantity updated")
    return Envelope[CartItemRead](data=CartItemRead.model_validate(line), message="Item added to cart successfully")


@router.put("/cart/{cart_item_id}", response_model=Envelope[CartItemRead | None])
def update_cart_item(
    cart_item_id: int,
    payload: CartItemUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[CartItemRead | None]:
    line = _get_cart_line(db, current_user, cart_item_id)
    line = cart_service.update_cart_item(db, line, payload.quantity, payload.special_instructions)
    if line is None:
        return Envelope[CartItemRead | None](data=None, message="Item removed from cart")
    return Envelope[CartItemRead | None](data=CartItemRead.model_validate(line), message="Cart item updated successfully")


@router.delete("/cart/clear/{user_id}", response_model=MessageResponse)
def clear_cart(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    ensure_self_or_admin(current_user, user_id)
    cart_service.clear_cart(db, user_id)
    return MessageResponse(message="Cart cleared successfully")


@router.delete("/cart/{cart_item_id}", response_model=MessageResponse)
def remove_cart_item(
    cart_item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    line = _get_cart_line(db, current_user, cart_item_id)
    cart_service.remove_cart_item(db, line)
    return MessageResponse(message="Item removed from cart")


@router.get("", response_model=PaginatedEnvelope[OrderWithItems])
def list_orders(
    user_id: int | None = None,
    order_status: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PaginatedEnvelope[OrderWithItems]:
    if not is_admin(current_user):
        user_id = current_user.id
    rows, pagination = paginate(order_service.orders_query(db, user_id=user_id, status=order_status), page, limit)
    return PaginatedEnvelope[OrderWithItems](
        data=[OrderWithItems.model_validate(order) for order in rows],
        message="Orders retrieved successfully",
        pagination=pagination,
    )


@router.get("/{order_id}", response_model=Envelope[OrderDetail])
def get_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[OrderDetail]:
    order = order_service.get_order(db, order_id)
    if order is None or not _can_view_order(current_user, order):
        raise ApiError(status.HTTP_404_NOT_FOUND, "Order not found")
    return Envelope[OrderDetail](data=OrderDetail.model_validate(order), message="Order retrieved successfully")


@router.post("", response_model=Envelope[OrderCreated], status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[OrderCreated]:
    user_id = payload.user_id if payload.user_id is not None else current_user.id
    _ensure_target_user(db, current_user, user_id)
    try:
        order = order_service.place_order(db, user_id, payload)
    except OrderValidationError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc)) from exc

    created = OrderCreated(
        order=OrderRead.model_validate(order),
        order_number=order.order_number,
        total_amount=order.total_amount,
    )
    return Envelope[OrderCreated](data=created, message="Order placed successfully")


@router.patch("/{order_id}/status", response_model=Envelope[OrderRead])
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[OrderRead]:
    order = db.get(Order, order_id)
    if order is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Order not found")
    ensure_restaurant_access(db, current_user, order.restaurant_id)
    try:
        order = order_service.update_order_status(db, order, payload.status)
    except StatusTransitionError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
    return Envelope[OrderRead](data=OrderRead.model_validate(order), message="Order status updated successfully")
