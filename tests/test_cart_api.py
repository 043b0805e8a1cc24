"""Server-side cart endpoint tests."""

from fastapi.testclient import TestClient

from tests.helpers import register_admin, register_headers, seed_menu


def _add(client: TestClient, headers: dict[str, str], user_id: int, seeded: dict, item: str = "jollof", quantity: int = 1):
    return client.post(
        "/api/orders/cart",
        json={
            "user_id": user_id,
            "restaurant_id": seeded["restaurant"]["id"],
            "menu_item_id": seeded[item]["id"],
            "quantity": quantity,
        },
        headers=headers,
    )


def test_add_then_merge_same_item(client: TestClient) -> None:
    seeded = seed_menu(client)
    user_id, headers = register_headers(client, "cart@example.com")

    created = _add(client, headers, user_id, seeded, quantity=2)
    merged = _add(client, headers, user_id, seeded, quantity=1)

    assert created.status_code == 201
    assert created.json()["data"]["quantity"] == 2
    assert merged.status_code == 200
    assert merged.json()["data"]["quantity"] == 3
    assert merged.json()["data"]["id"] == created.json()["data"]["id"]


def test_get_cart_totals_from_menu_prices(client: TestClient) -> None:
    seeded = seed_menu(client)
    user_id, headers = register_headers(client, "cart@example.com")
    _add(client, headers, user_id, seeded, quantity=2)
    _add(client, headers, user_id, seeded, item="waakye")

    response = client.get(f"/api/orders/cart/{user_id}", headers=headers)

    assert response.status_code == 200
    cart = response.json()["data"]
    assert cart["total"] == 68.5
    assert [line["menu_item"]["name"] for line in cart["items"]] == ["Jollof Rice", "Waakye"]
    assert cart["items"][0]["restaurant"]["name"] == "Accra Kitchen"


def test_cart_requires_ownership(client: TestClient, session_factory) -> None:
    seeded = seed_menu(client)
    user_id, headers = register_headers(client, "cart@example.com")
    _, other_headers = register_headers(client, "nosy@example.com")
    line_id = _add(client, headers, user_id, seeded).json()["data"]["id"]
    _, admin_headers = register_admin(client, session_factory)

    peek = client.get(f"/api/orders/cart/{user_id}", headers=other_headers)
    add_for_other = _add(client, other_headers, user_id, seeded)
    edit = client.put(f"/api/orders/cart/{line_id}", json={"quantity": 5}, headers=other_headers)
    admin_peek = client.get(f"/api/orders/cart/{user_id}", headers=admin_headers)

    assert peek.status_code == 403
    assert add_for_other.status_code == 403
    assert edit.status_code == 403
    assert edit.json()["error"] == "Access denied - you can only modify your own resources"
    assert admin_peek.status_code == 200


def test_update_quantity_and_remove_on_zero(client: TestClient) -> None:
    seeded = seed_menu(client)
    user_id, headers = register_headers(client, "cart@example.com")
    line_id = _add(client, headers, user_id, seeded).json()["data"]["id"]

    updated = client.put(
        f"/api/orders/cart/{line_id}",
        json={"quantity": 4, "special_instructions": "extra shito"},
        headers=headers,
    )
    removed = client.put(f"/api/orders/cart/{line_id}", json={"quantity": 0}, headers=headers)
    missing = client.put(f"/api/orders/cart/{line_id}", json={"quantity": 1}, headers=headers)

    assert updated.status_code == 200
    assert updated.json()["data"]["quantity"] == 4
    assert updated.json()["data"]["special_instructions"] == "extra shito"
    assert removed.status_code == 200
    assert removed.json()["data"] is None
    assert missing.status_code == 404


def test_delete_line_and_clear(client: TestClient) -> None:
    seeded = seed_menu(client)
    user_id, headers = register_headers(client, "cart@example.com")
    line_id = _add(client, headers, user_id, seeded).json()["data"]["id"]
    _add(client, headers, user_id, seeded, item="waakye")

    deleted = client.delete(f"/api/orders/cart/{line_id}", headers=headers)
    after_delete = client.get(f"/api/orders/cart/{user_id}", headers=headers).json()["data"]
    cleared = client.delete(f"/api/orders/cart/clear/{user_id}", headers=headers)
    after_clear = client.get(f"/api/orders/cart/{user_id}", headers=headers).json()["data"]

    assert deleted.status_code == 200
    assert [line["menu_item"]["name"] for line in after_delete["items"]] == ["Waakye"]
    assert cleared.status_code == 200
    assert cleared.json()["message"] == "Cart cleared successfully"
    assert after_clear["items"] == []


def test_add_unavailable_item_fails(client: TestClient) -> None:
    seeded = seed_menu(client)
    user_id, headers = register_headers(client, "cart@example.com")
    client.delete(f"/api/menu/items/{seeded['jollof']['id']}", headers=seeded["owner_headers"])

    response = _add(client, headers, user_id, seeded)

    assert response.status_code == 400


def test_admin_cannot_fill_cart_of_unknown_user(client: TestClient, session_factory) -> None:
    seeded = seed_menu(client)
    customer_id, _ = register_headers(client, "cart@example.com")
    _, admin_headers = register_admin(client, session_factory)

    unknown = _add(client, admin_headers, 4242, seeded)
    for_customer = _add(client, admin_headers, customer_id, seeded)

    assert unknown.status_code == 404
    assert unknown.json()["error"] == "User not found"
    assert for_customer.status_code == 201
