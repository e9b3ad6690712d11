from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Teapot"

    # --- Order Storage ---
    # "remote": the order service over HTTP. "local": our own SQL table.
    ORDER_BACKEND: Literal["remote", "local"] = "remote"
    ORDER_API_URL: str = "https://teapotserver.onrender.com"
    ORDER_API_TIMEOUT: float = 10.0
    DATABASE_URL: str = "sqlite:///./data/teapot.db"

    # --- Cart Storage ---
    REDIS_URL: str | None = None
    CART_TTL_SECONDS: int = 3600

    # --- Checkout ---
    DELIVERY_FEE: Decimal = Decimal("2.99")
    CURRENCY_SYMBOL: str = "$"
    TIMEZONE: str = "Africa/Nairobi"

    # --- Staff View ---
    POLL_INTERVAL_SECONDS: float = 3.0

    # --- Staff Notifications (optional) ---
    TWILIO_ACCOUNT_SID: str | None = None
    TWILIO_AUTH_TOKEN: str | None = None
    TWILIO_FROM_NUMBER: str | None = None
    ADMIN_PHONE_NUMBER: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # Unknown variables in .env are not our business
    )

settings = Settings()
