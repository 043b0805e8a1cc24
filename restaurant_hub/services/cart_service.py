"""Server-side cart persistence."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session, joinedload

from restaurant_hub.models import CartItem, MenuItem

logger = logging.getLogger(__name__)


class CartItemUnavailableError(Exception):
    """Raised when the menu item cannot be added to a cart for this restaurant."""


def get_cart_lines(db: Session, user_id: int) -> list[CartItem]:
    return (
        db.query(CartItem)
        .options(joinedload(CartItem.menu_item), joinedload(CartItem.restaurant))
        .filter(CartItem.user_id == user_id)
        .order_by(CartItem.created_at.asc(), CartItem.id.asc())
        .all()
    )


def cart_total(lines: list[CartItem]) -> Decimal:
    return sum((line.menu_item.price * line.quantity for line in lines), Decimal("0.00"))


def get_cart_item(db: Session, cart_item_id: int) -> CartItem | None:
    return db.get(CartItem, cart_item_id)


def add_to_cart(
    db: Session,
    *,
    user_id: int,
    restaurant_id: int,
    menu_item_id: int,
    quantity: int,
    special_instructions: str | None = None,
) -> tuple[CartItem, bool]:
    """Add a line or bump the quantity of the matching one; returns (line, created)."""
    menu_item: MenuItem | None = db.get(MenuItem, menu_item_id)
    if menu_item is None or not menu_item.is_available or menu_item.restaurant_id != restaurant_id:
        raise CartItemUnavailableError(f"Menu item {menu_item_id} is not available")

    existing: CartItem | None = (
        db.query(CartItem)
        .filter(
            CartItem.user_id == user_id,
            CartItem.restaurant_id == restaurant_id,
            CartItem.menu_item_id == menu_item_id,
        )
        .first()
    )
    if existing is not None:
        existing.quantity += quantity
        if special_instructions is not None:
            existing.special_instructions = special_instructions
        db.commit()
        db.refresh(existing)
        return existing, False

    line = CartItem(
        user_id=user_id,
        restaurant_id=restaurant_id,
        menu_item_id=menu_item_id,
        quantity=quantity,
        special_instructions=special_instructions,
    )
    db.add(line)
    db.commit()
    db.refresh(line)
    logger.info("[CART] user_id=%s added menu_item_id=%s x%s", user_id, menu_item_id, quantity)
    return line, True


def update_cart_item(
    db: Session,
    line: CartItem,
    quantity: int,
    special_instructions: str | None = None,
) -> CartItem | None:
    """Set the quantity; zero or less removes the line and returns None."""
    if quantity <= 0:
        remove_cart_item(db, line)
        return None
    line.quantity = quantity
    if special_instructions is not None:
        line.special_instructions = special_instructions
    db.commit()
    db.refresh(line)
    return line


def remove_cart_item(db: Session, line: CartItem) -> None:
    db.delete(line)
    db.commit()


def clear_cart(db: Session, user_id: int) -> int:
    removed = db.query(CartItem).filter(CartItem.user_id == user_id).delete(synchronize_session=False)
    db.commit()
    logger.info("[CART] Cleared %s lines for user_id=%s", removed, user_id)
    return removed
