"""Centralized role, ownership and restaurant access guards."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import Depends, status
from sqlalchemy.orm import Session

from restaurant_hub.core.errors import ApiError
from restaurant_hub.core.security import get_current_user
from restaurant_hub.models import Restaurant, User

ADMIN_ROLE = "admin"
OWNER_ROLE = "restaurant_owner"


def is_admin(user: User | None) -> bool:
    return user is not None and user.role == ADMIN_ROLE


def ensure_role(user: User, allowed_roles: set[str]) -> None:
    """Ensure user role is one of allowed roles."""
    if user.role not in allowed_roles:
        raise ApiError(status.HTTP_403_FORBIDDEN, "Insufficient permissions")


def require_role(*roles: str) -> Callable[..., User]:
    """Build a dependency that admits only the listed roles."""

    allowed = set(roles)

    def _checker(current_user: User = Depends(get_current_user)) -> User:
        ensure_role(current_user, allowed)
        return current_user

    return _checker


def ensure_owner_or_admin(user: User, resource: Any | None) -> Any:
    """Admins pass; everyone else must own the resource via user_id or owner_id."""
    if resource is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Resource not found")
    if is_admin(user):
        return resource
    owner_id = getattr(resource, "user_id", None) or getattr(resource, "owner_id", None)
    if owner_id != user.id:
        raise ApiError(status.HTTP_403_FORBIDDEN, "Access denied - you can only modify your own resources")
    return resource


def ensure_self_or_admin(user: User, user_id: int) -> None:
    """Admins pass; everyone else may only address their own account."""
    if is_admin(user) or user.id == user_id:
        return
    raise ApiError(status.HTTP_403_FORBIDDEN, "Access denied - you can only modify your own resources")


def require_self_or_admin(user_id: int, current_user: User = Depends(get_current_user)) -> User:
    """Dependency variant of ``ensure_self_or_admin`` keyed on the ``user_id`` path param."""
    ensure_self_or_admin(current_user, user_id)
    return current_user


def ensure_restaurant_access(db: Session, user: User, restaurant_id: int | None) -> Restaurant | None:
    """Admins pass; restaurant owners only for restaurants they own."""
    if not is_admin(user) and user.role != OWNER_ROLE:
        raise ApiError(status.HTTP_403_FORBIDDEN, "Insufficient permissions - restaurant access required")

    if restaurant_id is None:
        if is_admin(user):
            return None
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Restaurant ID required")

    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Restaurant not found")
    if is_admin(user):
        return restaurant
    if restaurant.owner_id != user.id:
        raise ApiError(status.HTTP_403_FORBIDDEN, "Access denied - you can only modify your own restaurants")
    return restaurant
