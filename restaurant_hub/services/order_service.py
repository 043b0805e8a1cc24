"""Order pricing, placement and lookup."""

import logging
import secrets
import string
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Query, Session, joinedload, selectinload

from restaurant_hub.core.config import settings
from restaurant_hub.models import CartItem, MenuItem, Order, OrderItem
from restaurant_hub.models.order import ORDER_TYPES
from restaurant_hub.schemas.order import OrderCreate, OrderItemPayload
from restaurant_hub.services.order_status import can_transition, is_valid_status, set_status

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


class OrderValidationError(Exception):
    """Raised when an order payload cannot be priced."""


class StatusTransitionError(Exception):
    """Raised for unknown statuses or moves the lifecycle does not allow."""


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_totals(lines: list[tuple[Decimal, int]], order_type: str) -> OrderTotals:
    """Price (unit_price, quantity) lines: subtotal + delivery fee + tax on the subtotal."""
    subtotal = _money(sum((price * quantity for price, quantity in lines), Decimal("0")))
    delivery_fee = _money(settings.delivery_fee) if order_type == "delivery" else Decimal("0.00")
    tax = _money(subtotal * settings.tax_rate)
    return OrderTotals(subtotal=subtotal, delivery_fee=delivery_fee, tax=tax, total=subtotal + delivery_fee + tax)


def generate_order_number(now: datetime | None = None) -> str:
    """Return ``ORD-<epoch millis>-<9 upper-case alphanumerics>``."""
    millis = int((now.timestamp() if now is not None else time.time()) * 1000)
    suffix = "".join(secrets.choice(ORDER_NUMBER_ALPHABET) for _ in range(9))
    return f"ORD-{millis}-{suffix}"


def _resolve_lines(db: Session, restaurant_id: int, items: list[OrderItemPayload]) -> list[tuple[OrderItemPayload, MenuItem]]:
    resolved: list[tuple[OrderItemPayload, MenuItem]] = []
    for payload in items:
        menu_item: MenuItem | None = db.get(MenuItem, payload.menu_item_id)
        if menu_item is None or not menu_item.is_available or menu_item.restaurant_id != restaurant_id:
            raise OrderValidationError(f"Menu item {payload.menu_item_id} is not available")
        resolved.append((payload, menu_item))
    return resolved


def place_order(db: Session, user_id: int, payload: OrderCreate) -> Order:
    """Price the order from current menu prices, persist it and empty the matching cart."""
    if payload.order_type not in ORDER_TYPES:
        raise OrderValidationError(f"Invalid order type: {payload.order_type}")
    resolved = _resolve_lines(db, payload.restaurant_id, payload.items)
    totals = calculate_totals(
        [(menu_item.price, line.quantity) for line, menu_item in resolved],
        payload.order_type,
    )
    now = datetime.now(timezone.utc)

    order = Order(
        user_id=user_id,
        restaurant_id=payload.restaurant_id,
        order_number=generate_order_number(now),
        order_type=payload.order_type,
        status="pending",
        subtotal_amount=totals.subtotal,
        tax_amount=totals.tax,
        delivery_fee=totals.delivery_fee,
        total_amount=totals.total,
        delivery_address=payload.delivery_address,
        delivery_instructions=payload.delivery_instructions,
        notes=payload.notes,
        estimated_delivery_time=now + timedelta(minutes=settings.estimated_delivery_minutes),
        status_updated_at=now,
    )
    db.add(order)
    db.flush()

    for line, menu_item in resolved:
        db.add(
            OrderItem(
                order_id=order.id,
                menu_item_id=menu_item.id,
                quantity=line.quantity,
                unit_price=menu_item.price,
                total_price=_money(menu_item.price * line.quantity),
                special_instructions=line.special_instructions,
            )
        )

    cleared = (
        db.query(CartItem)
        .filter(CartItem.user_id == user_id, CartItem.restaurant_id == payload.restaurant_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    db.refresh(order)
    logger.info(
        "[ORDERS] Placed %s user_id=%s restaurant_id=%s total=%s cleared_cart_lines=%s",
        order.order_number,
        user_id,
        payload.restaurant_id,
        order.total_amount,
        cleared,
    )
    return order


def orders_query(db: Session, *, user_id: int | None = None, status: str | None = None) -> Query:
    query = (
        db.query(Order)
        .options(
            joinedload(Order.restaurant),
            selectinload(Order.order_items).joinedload(OrderItem.menu_item),
        )
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    if user_id is not None:
        query = query.filter(Order.user_id == user_id)
    if status:
        query = query.filter(Order.status == status)
    return query


def get_order(db: Session, order_id: int) -> Order | None:
    return (
        db.query(Order)
        .options(
            joinedload(Order.restaurant),
            joinedload(Order.user),
            selectinload(Order.order_items).joinedload(OrderItem.menu_item),
        )
        .filter(Order.id == order_id)
        .first()
    )


def update_order_status(db: Session, order: Order, new_status: str) -> Order:
    if not is_valid_status(new_status):
        raise StatusTransitionError("Invalid status")
    if not can_transition(order.status, new_status):
        raise StatusTransitionError(f"Cannot change order status from {order.status} to {new_status}")
    previous = order.status
    set_status(order, new_status, datetime.now(timezone.utc))
    db.commit()
    db.refresh(order)
    logger.info("[ORDERS] order_id=%s status %s -> %s", order.id, previous, new_status)
    return order
