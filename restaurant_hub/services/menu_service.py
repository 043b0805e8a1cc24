"""Menu item and category service helpers shared by API and Streamlit routes."""

from decimal import Decimal
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, joinedload

from restaurant_hub.models.menu import MenuCategory, MenuItem
from restaurant_hub.models.restaurant import Restaurant

PROTECTED_MENU_FIELDS: frozenset[str] = frozenset({"id", "created_at", "restaurant_id"})


def menu_items_query(
    db: Session,
    *,
    restaurant_id: int | None = None,
    category_id: int | None = None,
    search: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    is_vegetarian: bool = False,
    is_vegan: bool = False,
    is_gluten_free: bool = False,
) -> Query:
    """Return available items of active restaurants, filtered and ordered by name."""
    query = (
        db.query(MenuItem)
        .join(Restaurant, MenuItem.restaurant_id == Restaurant.id)
        .options(joinedload(MenuItem.restaurant), joinedload(MenuItem.category))
        .filter(MenuItem.is_available.is_(True), Restaurant.is_active.is_(True))
    )
    if restaurant_id is not None:
        query = query.filter(MenuItem.restaurant_id == restaurant_id)
    if category_id is not None:
        query = query.filter(MenuItem.category_id == category_id)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(MenuItem.name.ilike(pattern), MenuItem.description.ilike(pattern)))
    if min_price is not None:
        query = query.filter(MenuItem.price >= min_price)
    if max_price is not None:
        query = query.filter(MenuItem.price <= max_price)
    if is_vegetarian:
        query = query.filter(MenuItem.is_vegetarian.is_(True))
    if is_vegan:
        query = query.filter(MenuItem.is_vegan.is_(True))
    if is_gluten_free:
        query = query.filter(MenuItem.is_gluten_free.is_(True))
    return query.order_by(MenuItem.name.asc(), MenuItem.id.asc())


def get_available_menu_item(db: Session, item_id: int) -> MenuItem | None:
    return (
        db.query(MenuItem)
        .options(joinedload(MenuItem.restaurant), joinedload(MenuItem.category))
        .filter(MenuItem.id == item_id, MenuItem.is_available.is_(True))
        .first()
    )


def get_menu_item(db: Session, item_id: int) -> MenuItem | None:
    return db.get(MenuItem, item_id)


def get_category(db: Session, category_id: int) -> MenuCategory | None:
    return db.get(MenuCategory, category_id)


def category_belongs_to(category: MenuCategory | None, restaurant_id: int) -> bool:
    return category is not None and category.restaurant_id == restaurant_id


def create_menu_item(db: Session, values: dict[str, Any]) -> MenuItem:
    """Create and persist a menu item."""
    item = MenuItem(**values)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_menu_item(db: Session, item: MenuItem, changes: dict[str, Any]) -> MenuItem:
    for field, value in changes.items():
        if field in PROTECTED_MENU_FIELDS:
            continue
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return item


def withdraw_menu_item(db: Session, item: MenuItem) -> MenuItem:
    """Soft delete: the row stays for historic orders but is no longer offered."""
    item.is_available = False
    db.commit()
    db.refresh(item)
    return item


def list_active_categories(db: Session, restaurant_id: int | None = None) -> list[MenuCategory]:
    query = db.query(MenuCategory).filter(MenuCategory.is_active.is_(True))
    if restaurant_id is not None:
        query = query.filter(MenuCategory.restaurant_id == restaurant_id)
    return query.order_by(MenuCategory.display_order.asc(), MenuCategory.id.asc()).all()


def create_category(db: Session, values: dict[str, Any]) -> MenuCategory:
    category = MenuCategory(**values)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def update_category(db: Session, category: MenuCategory, changes: dict[str, Any]) -> MenuCategory:
    for field, value in changes.items():
        if field in PROTECTED_MENU_FIELDS:
            continue
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    return category
