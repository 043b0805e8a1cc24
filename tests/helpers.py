"""Request helpers shared by the API tests."""

from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from restaurant_hub.models import User

PASSWORD = "secret123"


def register(
    client: TestClient,
    email: str,
    role: str = "customer",
    first_name: str = "Ama",
    last_name: str = "Mensah",
) -> dict[str, Any]:
    response = client.post(
        "/api/auth/register",
        json={
            "email": email,
            "password": PASSWORD,
            "first_name": first_name,
            "last_name": last_name,
            "role": role,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register_headers(client: TestClient, email: str, role: str = "customer") -> tuple[int, dict[str, str]]:
    data = register(client, email, role=role)
    return data["user"]["id"], auth_headers(data["token"])


def register_admin(client: TestClient, session_factory: sessionmaker, email: str = "admin@example.com") -> tuple[int, dict[str, str]]:
    user_id, headers = register_headers(client, email)
    with session_factory() as db:
        user = db.get(User, user_id)
        user.role = "admin"
        db.commit()
    return user_id, headers


def create_restaurant(client: TestClient, headers: dict[str, str], name: str = "Accra Kitchen", **extra: Any) -> dict[str, Any]:
    payload = {"name": name, "description": "Local dishes", "cuisine_type": "Ghanaian", **extra}
    response = client.post("/api/restaurants", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_category(client: TestClient, headers: dict[str, str], restaurant_id: int, name: str = "Mains") -> dict[str, Any]:
    response = client.post(
        "/api/menu/categories",
        json={"restaurant_id": restaurant_id, "name": name},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_menu_item(
    client: TestClient,
    headers: dict[str, str],
    restaurant_id: int,
    category_id: int,
    name: str,
    price: str,
    **extra: Any,
) -> dict[str, Any]:
    response = client.post(
        "/api/menu/items",
        json={"restaurant_id": restaurant_id, "category_id": category_id, "name": name, "price": price, **extra},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def seed_menu(client: TestClient, owner_email: str = "owner@example.com") -> dict[str, Any]:
    """Register an owner with one restaurant, one category and two dishes."""
    owner_id, owner_headers = register_headers(client, owner_email, role="restaurant_owner")
    restaurant = create_restaurant(client, owner_headers)
    category = create_category(client, owner_headers, restaurant["id"])
    jollof = create_menu_item(client, owner_headers, restaurant["id"], category["id"], "Jollof Rice", "25.00")
    waakye = create_menu_item(
        client, owner_headers, restaurant["id"], category["id"], "Waakye", "18.50", is_vegetarian=True
    )
    return {
        "owner_id": owner_id,
        "owner_headers": owner_headers,
        "restaurant": restaurant,
        "category": category,
        "jollof": jollof,
        "waakye": waakye,
    }
