"""Server-side cart ORM model."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurant_hub.db.base import Base


class CartItem(Base):
    """Pending cart line; one row per user, restaurant and menu item."""

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_id", "restaurant_id", "menu_item_id", name="uq_cart_user_restaurant_item"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), nullable=False)
    menu_item_id: Mapped[int] = mapped_column(ForeignKey("menu_items.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    special_instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    menu_item: Mapped["MenuItem"] = relationship()
    restaurant: Mapped["Restaurant"] = relationship()
