"""Role, ownership and restaurant access guard tests."""

from types import SimpleNamespace

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from restaurant_hub.core.errors import ApiError
from restaurant_hub.core.security import (
    ACCESS_TOKEN_TYPE,
    RESET_TOKEN_TYPE,
    InvalidTokenError,
    create_access_token,
    create_reset_token,
    decode_token,
    get_optional_user,
    get_password_hash,
    verify_password,
)
from restaurant_hub.models import Restaurant, User
from restaurant_hub.models.user import normalize_user_role
from restaurant_hub.services.security_guards import (
    ensure_owner_or_admin,
    ensure_restaurant_access,
    ensure_role,
    ensure_self_or_admin,
)


def _user(user_id: int, role: str) -> User:
    return User(id=user_id, email=f"u{user_id}@example.com", role=role, is_active=True)


def test_password_hash_roundtrip() -> None:
    hashed = get_password_hash("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_token_types_are_not_interchangeable() -> None:
    user = _user(7, "customer")

    assert decode_token(create_access_token(user), ACCESS_TOKEN_TYPE) == 7
    assert decode_token(create_reset_token(user), RESET_TOKEN_TYPE) == 7
    with pytest.raises(InvalidTokenError):
        decode_token(create_reset_token(user), ACCESS_TOKEN_TYPE)
    with pytest.raises(InvalidTokenError):
        decode_token("garbage", ACCESS_TOKEN_TYPE)


def test_ensure_role() -> None:
    ensure_role(_user(1, "admin"), {"admin"})
    with pytest.raises(ApiError) as exc_info:
        ensure_role(_user(1, "customer"), {"admin", "restaurant_owner"})

    assert exc_info.value.status_code == 403
    assert exc_info.value.detail == "Insufficient permissions"


def test_ensure_owner_or_admin() -> None:
    line = SimpleNamespace(user_id=5)
    restaurant = SimpleNamespace(owner_id=5)

    assert ensure_owner_or_admin(_user(5, "customer"), line) is line
    assert ensure_owner_or_admin(_user(5, "restaurant_owner"), restaurant) is restaurant
    assert ensure_owner_or_admin(_user(1, "admin"), line) is line
    with pytest.raises(ApiError) as forbidden:
        ensure_owner_or_admin(_user(6, "customer"), line)
    with pytest.raises(ApiError) as missing:
        ensure_owner_or_admin(_user(6, "customer"), None)

    assert forbidden.value.status_code == 403
    assert missing.value.status_code == 404


def test_ensure_self_or_admin() -> None:
    ensure_self_or_admin(_user(3, "customer"), 3)
    ensure_self_or_admin(_user(1, "admin"), 3)
    with pytest.raises(ApiError) as exc_info:
        ensure_self_or_admin(_user(4, "customer"), 3)

    assert exc_info.value.status_code == 403


def test_ensure_restaurant_access(session_factory) -> None:
    with session_factory() as db:
        owner = User(email="o@example.com", password_hash="x", first_name="O", last_name="W", role="restaurant_owner")
        rival = User(email="r@example.com", password_hash="x", first_name="R", last_name="V", role="restaurant_owner")
        db.add_all([owner, rival])
        db.flush()
        restaurant = Restaurant(owner_id=owner.id, name="Spot", description="d", cuisine_type="c")
        db.add(restaurant)
        db.commit()

        assert ensure_restaurant_access(db, owner, restaurant.id) is restaurant
        assert ensure_restaurant_access(db, _user(99, "admin"), restaurant.id) is restaurant
        assert ensure_restaurant_access(db, _user(99, "admin"), None) is None

        cases = [
            (rival, restaurant.id, 403),
            (owner, 999, 404),
            (owner, None, 400),
            (_user(50, "customer"), restaurant.id, 403),
        ]
        for user, restaurant_id, expected in cases:
            with pytest.raises(ApiError) as exc_info:
                ensure_restaurant_access(db, user, restaurant_id)
            assert exc_info.value.status_code == expected


def test_optional_user_never_fails(session_factory) -> None:
    with session_factory() as db:
        user = User(email="opt@example.com", password_hash="x", first_name="O", last_name="P", role="customer")
        db.add(user)
        db.commit()

        valid = HTTPAuthorizationCredentials(scheme="Bearer", credentials=create_access_token(user))
        invalid = HTTPAuthorizationCredentials(scheme="Bearer", credentials="garbage")

        assert get_optional_user(valid, db) is user
        assert get_optional_user(invalid, db) is None
        assert get_optional_user(None, db) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, "customer"), (" Customer ", "customer"), ("owner", "restaurant_owner"), ("ADMIN", "admin")],
)
def test_normalize_user_role(raw: str | None, expected: str) -> None:
    assert normalize_user_role(raw) == expected


def test_normalize_user_role_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        normalize_user_role("chef")
