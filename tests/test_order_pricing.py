"""Unit tests for order pricing, numbering and status transitions."""

import re
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from restaurant_hub.models import Order
from restaurant_hub.services.order_service import calculate_totals, generate_order_number
from restaurant_hub.services.order_status import ALLOWED_TRANSITIONS, ORDER_STATUSES, can_transition, set_status


def test_delivery_totals_add_fee_and_tax() -> None:
    totals = calculate_totals([(Decimal("10.00"), 3), (Decimal("4.50"), 2)], "delivery")

    assert totals.subtotal == Decimal("39.00")
    assert totals.delivery_fee == Decimal("5.00")
    assert totals.tax == Decimal("4.88")
    assert totals.total == Decimal("48.88")


@pytest.mark.parametrize("order_type", ["pickup", "dine_in"])
def test_non_delivery_orders_skip_fee(order_type: str) -> None:
    totals = calculate_totals([(Decimal("20.00"), 1)], order_type)

    assert totals.delivery_fee == Decimal("0.00")
    assert totals.tax == Decimal("2.50")
    assert totals.total == Decimal("22.50")


def test_order_number_embeds_epoch_millis() -> None:
    now = datetime(2026, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)

    number = generate_order_number(now)

    millis = int(now.timestamp() * 1000)
    assert re.fullmatch(rf"ORD-{millis}-[A-Z0-9]{{9}}", number)
    assert generate_order_number(now) != number


def test_lifecycle_table_covers_every_status() -> None:
    assert set(ALLOWED_TRANSITIONS) == set(ORDER_STATUSES)
    assert ALLOWED_TRANSITIONS["delivered"] == set()
    assert ALLOWED_TRANSITIONS["cancelled"] == set()


@pytest.mark.parametrize(
    ("current", "new", "allowed"),
    [
        ("pending", "confirmed", True),
        ("pending", "cancelled", True),
        ("preparing", "cancelled", True),
        ("ready", "cancelled", False),
        ("ready", "delivered", True),
        ("pending", "ready", False),
        ("delivered", "pending", False),
    ],
)
def test_can_transition(current: str, new: str, allowed: bool) -> None:
    assert can_transition(current, new) is allowed


def test_set_status_stamps_delivery_time() -> None:
    order = Order(status="ready")
    now = datetime.now(timezone.utc)

    set_status(order, "delivered", now)

    assert order.status == "delivered"
    assert order.status_updated_at == now
    assert order.actual_delivery_time == now
