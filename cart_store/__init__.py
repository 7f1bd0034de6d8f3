"""Shopping cart state container with best-effort local persistence."""

from cart_store.exceptions import CartDataError, CartStoreError, StorageError
from cart_store.models import CartState, LineItem, ProductVariant
from cart_store.storage import CartStorage, FileCartStorage, MemoryCartStorage, RedisCartStorage
from cart_store.store import CartStore, create_cart_store
from cart_store.summary import CartSummary, PricingRules

__all__ = [
    "CartDataError",
    "CartState",
    "CartStorage",
    "CartStore",
    "CartStoreError",
    "CartSummary",
    "FileCartStorage",
    "LineItem",
    "MemoryCartStorage",
    "PricingRules",
    "ProductVariant",
    "RedisCartStorage",
    "StorageError",
    "create_cart_store",
]
