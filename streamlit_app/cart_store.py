"""Customer cart kept in memory and mirrored to a local JSON store."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

STORAGE_KEY = "restaurantHubCart"
CURRENCY_SYMBOL = "₵"
EMPTY_CART_MESSAGE = "Your cart is empty!"
PAYMENT_MESSAGE = "Order confirmed. Continue to payment to complete your order."


class JsonFileStorage:
    """String key/value store persisted as one JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            logger.warning("[CART] Discarding unreadable storage file %s", self.path)
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Readers only ever see a complete file.
        staging = self.path.with_name(f"{self.path.name}.tmp")
        staging.write_text(json.dumps(data), encoding="utf-8")
        staging.replace(self.path)


@dataclass
class CartEntry:
    name: str
    price: float
    restaurant: str
    image: str | None = None
    quantity: int = 1
    menu_item_id: int | None = None
    restaurant_id: int | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class OrderSummary:
    """What the confirmation view shows before the customer pays."""

    lines: list[str]
    restaurants: list[str]
    total: str


class EmptyCartError(Exception):
    def __init__(self) -> None:
        super().__init__(EMPTY_CART_MESSAGE)


def format_amount(value: float) -> str:
    return f"{CURRENCY_SYMBOL}{value:.2f}"


class Cart:
    """Shopping cart whose every mutation is saved under ``restaurantHubCart``."""

    currency_symbol = CURRENCY_SYMBOL

    def __init__(self, storage: JsonFileStorage) -> None:
        self.storage = storage
        self.items: list[CartEntry] = []
        self.total: float = 0.0
        self.load()

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def load(self) -> None:
        try:
            saved = self.storage.get_item(STORAGE_KEY)
            if saved is None:
                return
            payload: dict[str, Any] = json.loads(saved)
            self.items = [CartEntry(**entry) for entry in payload.get("items") or []]
            self.total = float(payload.get("total") or 0)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.error("[CART] Error loading cart: %s", exc)
            self.items = []
            self.total = 0.0

    def save(self) -> None:
        payload = {"items": [asdict(item) for item in self.items], "total": self.total}
        self.storage.set_item(STORAGE_KEY, json.dumps(payload))

    def _update(self) -> None:
        self.total = round(sum(item.line_total for item in self.items), 2)
        self.save()

    def add_item(
        self,
        name: str,
        price: float,
        restaurant: str,
        image: str | None = None,
        menu_item_id: int | None = None,
        restaurant_id: int | None = None,
    ) -> str:
        """Add one unit and return the notification text."""
        existing = next(
            (item for item in self.items if item.name == name and item.restaurant == restaurant),
            None,
        )
        if existing is not None:
            existing.quantity += 1
        else:
            self.items.append(
                CartEntry(
                    name=name,
                    price=float(price),
                    restaurant=restaurant,
                    image=image,
                    menu_item_id=menu_item_id,
                    restaurant_id=restaurant_id,
                )
            )
        self._update()
        return f"{name} added to cart!"

    def remove_item(self, index: int) -> None:
        del self.items[index]
        self._update()

    def update_quantity(self, index: int, change: int) -> None:
        item = self.items[index]
        item.quantity += change
        if item.quantity <= 0:
            self.remove_item(index)
        else:
            self._update()

    def clear(self) -> None:
        self.items = []
        self._update()

    def order_summary(self) -> OrderSummary:
        if not self.items:
            raise EmptyCartError()
        restaurants: list[str] = []
        for item in self.items:
            if item.restaurant not in restaurants:
                restaurants.append(item.restaurant)
        return OrderSummary(
            lines=[f"{item.name} ({item.quantity}x) - {format_amount(item.line_total)}" for item in self.items],
            restaurants=restaurants,
            total=format_amount(self.total),
        )

    def confirm_order(self) -> str:
        """Empty the cart and hand the customer over to payment."""
        if not self.items:
            raise EmptyCartError()
        self.clear()
        logger.info("[CART] Order confirmed; redirecting to payment")
        return PAYMENT_MESSAGE
