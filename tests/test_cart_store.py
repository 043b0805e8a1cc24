"""Persistent cart widget tests."""

import json
from pathlib import Path

import pytest

from streamlit_app.cart_store import (
    EMPTY_CART_MESSAGE,
    STORAGE_KEY,
    Cart,
    EmptyCartError,
    JsonFileStorage,
)


@pytest.fixture
def storage(tmp_path: Path) -> JsonFileStorage:
    return JsonFileStorage(tmp_path / "cart.json")


def test_add_item_merges_same_name_and_restaurant(storage: JsonFileStorage) -> None:
    cart = Cart(storage)

    first = cart.add_item("Jollof Rice", 25.0, "Accra Kitchen")
    cart.add_item("Jollof Rice", 25.0, "Accra Kitchen")
    cart.add_item("Jollof Rice", 27.0, "Kumasi Grill")

    assert first == "Jollof Rice added to cart!"
    assert [(item.restaurant, item.quantity) for item in cart.items] == [("Accra Kitchen", 2), ("Kumasi Grill", 1)]
    assert cart.total == 77.0
    assert cart.item_count == 3


def test_mutations_are_saved_under_storage_key(storage: JsonFileStorage) -> None:
    cart = Cart(storage)
    cart.add_item("Waakye", 18.5, "Accra Kitchen", image="waakye.jpg", menu_item_id=2, restaurant_id=1)

    saved = json.loads(storage.get_item(STORAGE_KEY))
    reloaded = Cart(storage)

    assert saved["total"] == 18.5
    assert saved["items"][0]["image"] == "waakye.jpg"
    assert reloaded.items[0].menu_item_id == 2
    assert reloaded.total == 18.5


def test_update_quantity_removes_at_zero(storage: JsonFileStorage) -> None:
    cart = Cart(storage)
    cart.add_item("Kelewele", 10.0, "Accra Kitchen")
    cart.update_quantity(0, 2)

    assert cart.items[0].quantity == 3
    assert cart.total == 30.0

    cart.update_quantity(0, -3)

    assert cart.items == []
    assert cart.total == 0.0


def test_remove_and_clear(storage: JsonFileStorage) -> None:
    cart = Cart(storage)
    cart.add_item("Kelewele", 10.0, "Accra Kitchen")
    cart.add_item("Banku", 15.0, "Accra Kitchen")

    cart.remove_item(0)
    assert [item.name for item in cart.items] == ["Banku"]

    cart.clear()
    assert Cart(storage).items == []


def test_corrupt_storage_yields_empty_cart(tmp_path: Path, caplog) -> None:
    path = tmp_path / "cart.json"
    path.write_text(json.dumps({STORAGE_KEY: "{not json"}), encoding="utf-8")

    cart = Cart(JsonFileStorage(path))

    assert cart.items == []
    assert cart.total == 0.0
    assert "Error loading cart" in caplog.text


def test_order_summary(storage: JsonFileStorage) -> None:
    cart = Cart(storage)
    cart.add_item("Jollof Rice", 25.0, "Accra Kitchen")
    cart.add_item("Jollof Rice", 25.0, "Accra Kitchen")
    cart.add_item("Sobolo", 5.5, "Zobo Place")

    summary = cart.order_summary()

    assert summary.lines == ["Jollof Rice (2x) - ₵50.00", "Sobolo (1x) - ₵5.50"]
    assert summary.restaurants == ["Accra Kitchen", "Zobo Place"]
    assert summary.total == "₵55.50"


def test_empty_cart_cannot_be_ordered(storage: JsonFileStorage) -> None:
    cart = Cart(storage)

    with pytest.raises(EmptyCartError) as exc_info:
        cart.order_summary()

    assert str(exc_info.value) == EMPTY_CART_MESSAGE == "Your cart is empty!"


def test_confirm_order_clears_cart(storage: JsonFileStorage) -> None:
    cart = Cart(storage)
    cart.add_item("Jollof Rice", 25.0, "Accra Kitchen")

    message = cart.confirm_order()

    assert "payment" in message
    assert cart.items == []
    assert json.loads(storage.get_item(STORAGE_KEY))["items"] == []


def test_saves_replace_the_store_without_leftovers(tmp_path: Path) -> None:
    path = tmp_path / "cart.json"
    path.write_text(json.dumps({"otherKey": "kept"}), encoding="utf-8")
    cart = Cart(JsonFileStorage(path))

    cart.add_item("Kelewele", 10.0, "Accra Kitchen")

    assert sorted(child.name for child in tmp_path.iterdir()) == ["cart.json"]
    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["otherKey"] == "kept"
    assert json.loads(stored[STORAGE_KEY])["total"] == 10.0
