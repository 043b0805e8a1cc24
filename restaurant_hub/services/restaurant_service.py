"""Restaurant and review queries."""

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from restaurant_hub.models import MenuCategory, Restaurant, Review

logger = logging.getLogger(__name__)

PROTECTED_RESTAURANT_FIELDS: frozenset[str] = frozenset({"id", "created_at", "owner_id"})


def list_restaurant_details(
    db: Session,
    cuisine_type: str | None = None,
    search: str | None = None,
) -> list[tuple[Restaurant, float | None, int]]:
    """Return active restaurants by name with their average rating and review count."""
    query = (
        db.query(Restaurant, func.avg(Review.rating), func.count(Review.id))
        .outerjoin(Review, Review.restaurant_id == Restaurant.id)
        .filter(Restaurant.is_active.is_(True))
        .group_by(Restaurant.id)
        .order_by(Restaurant.name.asc())
    )
    if cuisine_type:
        query = query.filter(func.lower(Restaurant.cuisine_type) == cuisine_type.lower())
    if search:
        query = query.filter(Restaurant.name.ilike(f"%{search}%"))
    return [
        (restaurant, round(float(average), 2) if average is not None else None, int(count))
        for restaurant, average, count in query.all()
    ]


def get_active_restaurant(db: Session, restaurant_id: int) -> Restaurant | None:
    """Return an active restaurant with categories, items and images loaded."""
    return (
        db.query(Restaurant)
        .options(
            selectinload(Restaurant.menu_categories).selectinload(MenuCategory.menu_items),
            selectinload(Restaurant.restaurant_images),
        )
        .filter(Restaurant.id == restaurant_id, Restaurant.is_active.is_(True))
        .first()
    )


def create_restaurant(db: Session, owner_id: int, values: dict[str, Any]) -> Restaurant:
    restaurant = Restaurant(owner_id=owner_id, **values)
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    logger.info("[RESTAURANTS] Created restaurant_id=%s owner_id=%s", restaurant.id, owner_id)
    return restaurant


def update_restaurant(db: Session, restaurant: Restaurant, changes: dict[str, Any]) -> Restaurant:
    for field, value in changes.items():
        if field in PROTECTED_RESTAURANT_FIELDS:
            continue
        setattr(restaurant, field, value)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def deactivate_restaurant(db: Session, restaurant: Restaurant) -> Restaurant:
    restaurant.is_active = False
    db.commit()
    db.refresh(restaurant)
    logger.info("[RESTAURANTS] Deactivated restaurant_id=%s", restaurant.id)
    return restaurant


def restaurant_reviews_query(db: Session, restaurant_id: int) -> Query:
    return (
        db.query(Review)
        .options(joinedload(Review.user))
        .filter(Review.restaurant_id == restaurant_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    )


def user_reviews_query(db: Session, user_id: int) -> Query:
    return (
        db.query(Review)
        .options(joinedload(Review.restaurant))
        .filter(Review.user_id == user_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    )


def add_review(
    db: Session,
    *,
    user_id: int,
    restaurant_id: int,
    rating: int,
    comment: str | None,
    order_id: int | None,
) -> Review:
    review = Review(user_id=user_id, restaurant_id=restaurant_id, rating=rating, comment=comment, order_id=order_id)
    db.add(review)
    db.commit()
    db.refresh(review)
    return review
