"""Order status transition helpers."""

from __future__ import annotations

from datetime import datetime

from restaurant_hub.models.order import Order

ORDER_STATUSES: list[str] = ["pending", "confirmed", "preparing", "ready", "delivered", "cancelled"]

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"preparing", "cancelled"},
    "preparing": {"ready", "cancelled"},
    "ready": {"delivered"},
    "delivered": set(),
    "cancelled": set(),
}


def is_valid_status(value: str) -> bool:
    return value in ORDER_STATUSES


def can_transition(current: str, new: str) -> bool:
    """Return whether order can move from current to new status."""
    return new in ALLOWED_TRANSITIONS.get(current, set())


def set_status(order: Order, new_status: str, now: datetime) -> None:
    """Set status and update corresponding timestamps."""
    order.status = new_status
    order.status_updated_at = now

    if new_status == "delivered":
        order.actual_delivery_time = now
