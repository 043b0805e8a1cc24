"""User account and address operations."""

import logging
import re
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.orm import Query, Session

from restaurant_hub.core.security import verify_password
from restaurant_hub.models.user import User, UserAddress, normalize_user_role

logger = logging.getLogger(__name__)

PROTECTED_USER_FIELDS: frozenset[str] = frozenset({"id", "created_at", "password_hash"})
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email) is not None


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email.strip().lower()).limit(1))


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def create_user(
    db: Session,
    *,
    email: str,
    hashed_password: str,
    first_name: str,
    last_name: str,
    phone: str | None = None,
    role: str = "customer",
) -> User:
    user = User(
        email=email.strip().lower(),
        password_hash=hashed_password,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=normalize_user_role(role),
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("[USERS] Created user_id=%s role=%s", user.id, user.role)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Return the user for valid credentials regardless of active flag."""
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def record_login(db: Session, user: User) -> User:
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user


def update_profile(db: Session, user: User, *, first_name: str, last_name: str, phone: str | None) -> User:
    user.first_name = first_name
    user.last_name = last_name
    user.phone = phone
    db.commit()
    db.refresh(user)
    return user


def set_password(db: Session, user: User, hashed_password: str) -> None:
    user.password_hash = hashed_password
    db.commit()
    logger.info("[USERS] Password updated for user_id=%s", user.id)


def list_users_query(db: Session, role: str | None = None, search: str | None = None) -> Query:
    query = db.query(User).order_by(User.created_at.desc(), User.id.desc())
    if role:
        query = query.filter(User.role == role)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(User.first_name.ilike(pattern), User.last_name.ilike(pattern), User.email.ilike(pattern))
        )
    return query


def update_user(db: Session, user: User, changes: dict[str, Any]) -> User:
    """Apply admin edits, skipping fields that are never client-writable."""
    for field, value in changes.items():
        if field in PROTECTED_USER_FIELDS:
            continue
        if field == "role":
            value = normalize_user_role(value)
        if field == "email" and value is not None:
            value = value.strip().lower()
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def set_user_active(db: Session, user: User, is_active: bool) -> User:
    user.is_active = is_active
    db.commit()
    db.refresh(user)
    logger.info("[USERS] user_id=%s is_active=%s", user.id, is_active)
    return user


def list_addresses(db: Session, user_id: int) -> list[UserAddress]:
    return (
        db.query(UserAddress)
        .filter(UserAddress.user_id == user_id)
        .order_by(UserAddress.is_default.desc(), UserAddress.created_at.asc(), UserAddress.id.asc())
        .all()
    )


def get_address(db: Session, user_id: int, address_id: int) -> UserAddress | None:
    return (
        db.query(UserAddress)
        .filter(UserAddress.id == address_id, UserAddress.user_id == user_id)
        .first()
    )


def _clear_default_address(db: Session, user_id: int) -> None:
    db.query(UserAddress).filter(
        UserAddress.user_id == user_id,
        UserAddress.is_default.is_(True),
    ).update({UserAddress.is_default: False}, synchronize_session="fetch")


def add_address(db: Session, user_id: int, values: dict[str, Any]) -> UserAddress:
    if values.get("is_default"):
        _clear_default_address(db, user_id)
    address = UserAddress(user_id=user_id, **values)
    db.add(address)
    db.commit()
    db.refresh(address)
    return address


def update_address(db: Session, address: UserAddress, changes: dict[str, Any]) -> UserAddress:
    if changes.get("is_default"):
        _clear_default_address(db, address.user_id)
    for field, value in changes.items():
        if field in {"id", "user_id", "created_at"}:
            continue
        setattr(address, field, value)
    db.commit()
    db.refresh(address)
    return address


def delete_address(db: Session, address: UserAddress) -> None:
    db.delete(address)
    db.commit()
