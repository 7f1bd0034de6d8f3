"""Cart store settings, read from environment variables (or a .env file)."""

from decimal import Decimal
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Persistent slot
    cart_storage_backend: Literal["redis", "file", "memory"] = "file"
    cart_storage_key: str = "brightbuy_cart"
    cart_file_path: str = ".cart/brightbuy_cart.json"
    # Seconds before an untouched Redis cart expires; None keeps it forever.
    cart_ttl: Optional[int] = None
    # Write the slot from a background worker instead of inline.
    cart_persist_async: bool = False

    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0

    # Order summary
    free_shipping_threshold: Decimal = Decimal("50")
    shipping_fee: Decimal = Decimal("9.99")
    tax_rate: Decimal = Decimal("0.08")

    log_level: str = "INFO"
    cart_service_port: int = 8001
