"""Restaurant and review endpoint tests."""

from fastapi.testclient import TestClient

from tests.helpers import create_restaurant, register_admin, register_headers, seed_menu


def test_customer_cannot_create_restaurant(client: TestClient) -> None:
    _, headers = register_headers(client, "customer@example.com")

    response = client.post(
        "/api/restaurants",
        json={"name": "Nope", "description": "x", "cuisine_type": "Thai"},
        headers=headers,
    )

    assert response.status_code == 403
    assert response.json()["error"] == "Insufficient permissions"


def test_create_restaurant_requires_core_fields(client: TestClient) -> None:
    _, headers = register_headers(client, "owner@example.com", role="restaurant_owner")

    response = client.post("/api/restaurants", json={"name": "Half"}, headers=headers)

    assert response.status_code == 400


def test_owner_creates_and_lists_restaurants_with_ratings(client: TestClient) -> None:
    owner_id, owner_headers = register_headers(client, "owner@example.com", role="restaurant_owner")
    create_restaurant(client, owner_headers, name="Zobo Place", cuisine_type="Drinks")
    kitchen = create_restaurant(client, owner_headers, name="Accra Kitchen")
    _, customer_headers = register_headers(client, "eater@example.com")
    client.post(f"/api/restaurants/{kitchen['id']}/reviews", json={"rating": 4}, headers=customer_headers)
    client.post(f"/api/restaurants/{kitchen['id']}/reviews", json={"rating": 5}, headers=customer_headers)

    response = client.get("/api/restaurants")

    assert response.status_code == 200
    rows = response.json()["data"]
    assert [row["name"] for row in rows] == ["Accra Kitchen", "Zobo Place"]
    assert rows[0]["owner_id"] == owner_id
    assert rows[0]["average_rating"] == 4.5
    assert rows[0]["review_count"] == 2
    assert rows[1]["average_rating"] is None
    assert rows[1]["review_count"] == 0


def test_list_restaurants_filters(client: TestClient) -> None:
    _, owner_headers = register_headers(client, "owner@example.com", role="restaurant_owner")
    create_restaurant(client, owner_headers, name="Zobo Place", cuisine_type="Drinks")
    create_restaurant(client, owner_headers, name="Accra Kitchen")

    by_cuisine = client.get("/api/restaurants", params={"cuisine_type": "drinks"})
    by_search = client.get("/api/restaurants", params={"search": "kitch"})

    assert [row["name"] for row in by_cuisine.json()["data"]] == ["Zobo Place"]
    assert [row["name"] for row in by_search.json()["data"]] == ["Accra Kitchen"]


def test_restaurant_detail_nests_categories_and_items(client: TestClient) -> None:
    seeded = seed_menu(client)
    restaurant_id = seeded["restaurant"]["id"]

    response = client.get(f"/api/restaurants/{restaurant_id}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Accra Kitchen"
    assert len(data["menu_categories"]) == 1
    assert [item["name"] for item in data["menu_categories"][0]["menu_items"]] == ["Jollof Rice", "Waakye"]
    assert data["menu_categories"][0]["menu_items"][0]["price"] == 25.0
    assert data["restaurant_images"] == []


def test_restaurant_detail_missing_is_404(client: TestClient) -> None:
    response = client.get("/api/restaurants/999")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Restaurant not found"}


def test_update_restaurant_ignores_protected_fields(client: TestClient) -> None:
    seeded = seed_menu(client)
    restaurant_id = seeded["restaurant"]["id"]

    response = client.put(
        f"/api/restaurants/{restaurant_id}",
        json={"name": "Accra Kitchen II", "owner_id": 999, "id": 42},
        headers=seeded["owner_headers"],
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Accra Kitchen II"
    assert data["id"] == restaurant_id
    assert data["owner_id"] == seeded["owner_id"]


def test_other_owner_cannot_modify_restaurant(client: TestClient) -> None:
    seeded = seed_menu(client)
    _, other_headers = register_headers(client, "rival@example.com", role="restaurant_owner")
    _, customer_headers = register_headers(client, "customer@example.com")
    restaurant_id = seeded["restaurant"]["id"]

    rival = client.put(f"/api/restaurants/{restaurant_id}", json={"name": "Mine"}, headers=other_headers)
    customer = client.delete(f"/api/restaurants/{restaurant_id}", headers=customer_headers)

    assert rival.status_code == 403
    assert rival.json()["error"] == "Access denied - you can only modify your own restaurants"
    assert customer.status_code == 403
    assert customer.json()["error"] == "Insufficient permissions - restaurant access required"


def test_delete_restaurant_is_soft(client: TestClient, session_factory) -> None:
    seeded = seed_menu(client)
    restaurant_id = seeded["restaurant"]["id"]
    _, admin_headers = register_admin(client, session_factory)

    response = client.delete(f"/api/restaurants/{restaurant_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["is_active"] is False
    assert client.get(f"/api/restaurants/{restaurant_id}").status_code == 404
    assert client.get("/api/restaurants").json()["data"] == []


def test_reviews_are_paginated_newest_first(client: TestClient) -> None:
    seeded = seed_menu(client)
    restaurant_id = seeded["restaurant"]["id"]
    _, headers = register_headers(client, "critic@example.com")
    for rating in (3, 4, 5):
        created = client.post(
            f"/api/restaurants/{restaurant_id}/reviews",
            json={"rating": rating, "comment": f"rated {rating}"},
            headers=headers,
        )
        assert created.status_code == 201

    response = client.get(f"/api/restaurants/{restaurant_id}/reviews", params={"limit": 2})

    body = response.json()
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
    assert [review["rating"] for review in body["data"]] == [5, 4]
    assert body["data"][0]["user"]["first_name"] == "Ama"


def test_review_validation(client: TestClient) -> None:
    seeded = seed_menu(client)
    restaurant_id = seeded["restaurant"]["id"]
    _, headers = register_headers(client, "critic@example.com")

    out_of_range = client.post(f"/api/restaurants/{restaurant_id}/reviews", json={"rating": 6}, headers=headers)
    anonymous = client.post(f"/api/restaurants/{restaurant_id}/reviews", json={"rating": 4})
    missing_restaurant = client.post("/api/restaurants/999/reviews", json={"rating": 4}, headers=headers)
    foreign_order = client.post(
        f"/api/restaurants/{restaurant_id}/reviews",
        json={"rating": 4, "order_id": 12345},
        headers=headers,
    )

    assert out_of_range.status_code == 400
    assert anonymous.status_code == 401
    assert missing_restaurant.status_code == 404
    assert foreign_order.status_code == 400


def test_update_restaurant_rejects_null_for_required_fields(client: TestClient) -> None:
    seeded = seed_menu(client)
    url = f"/api/restaurants/{seeded['restaurant']['id']}"

    no_description = client.put(url, json={"description": None}, headers=seeded["owner_headers"])
    no_active_flag = client.put(url, json={"is_active": None}, headers=seeded["owner_headers"])
    cleared_phone = client.put(url, json={"phone": None}, headers=seeded["owner_headers"])

    assert no_description.status_code == 400
    assert no_description.json()["error"].startswith("description:")
    assert no_active_flag.status_code == 400
    assert cleared_phone.status_code == 200
    assert client.get(url).json()["data"]["description"] == "Local dishes"


def test_cuisine_filter_matches_exactly(client: TestClient) -> None:
    _, owner_headers = register_headers(client, "owner@example.com", role="restaurant_owner")
    create_restaurant(client, owner_headers, name="Zobo Place", cuisine_type="Drinks")

    wildcard = client.get("/api/restaurants", params={"cuisine_type": "%"})
    partial = client.get("/api/restaurants", params={"cuisine_type": "Drink_"})

    assert wildcard.json()["data"] == []
    assert partial.json()["data"] == []
