"""Shared DB and cart helpers for the Streamlit ordering page."""

from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from restaurant_hub.core.config import settings
from restaurant_hub.db.base import Base
from streamlit_app.cart_store import Cart, JsonFileStorage

engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if settings.database_url.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base.metadata.create_all(bind=engine)


def get_session() -> Session:
    return SessionLocal()


def load_cart() -> Cart:
    return Cart(JsonFileStorage(settings.cart_storage_path))


def format_money(value: Decimal | float) -> str:
    return f"{settings.currency_symbol}{float(value):.2f}"
