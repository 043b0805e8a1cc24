"""Application configuration."""

from decimal import Decimal
from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Restaurant Hub API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    log_level: str = getenv("LOG_LEVEL", "INFO")
    database_url: str = getenv("DATABASE_URL", "sqlite:///./restaurant_hub.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", str(60 * 24 * 7)))
    reset_token_expire_minutes: int = int(getenv("RESET_TOKEN_EXPIRE_MINUTES", "60"))
    cors_origins: list[str] = [origin.strip() for origin in getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
    tax_rate: Decimal = Decimal(getenv("TAX_RATE", "0.125"))
    delivery_fee: Decimal = Decimal(getenv("DELIVERY_FEE", "5.00"))
    default_currency: str = getenv("DEFAULT_CURRENCY", "GHS")
    currency_symbol: str = getenv("CURRENCY_SYMBOL", "₵")
    estimated_delivery_minutes: int = int(getenv("ESTIMATED_DELIVERY_MINUTES", "45"))
    admin_email: str = getenv("ADMIN_EMAIL", "")
    admin_password: str = getenv("ADMIN_PASSWORD", "")
    cart_storage_path: str = getenv("CART_STORAGE_PATH", "./.restaurant_hub_cart.json")
    host: str = getenv("HOST", "0.0.0.0")
    port: int = int(getenv("PORT", "5000"))


settings: Settings = Settings()
