"""Print the cart saved in the configured storage slot.

Usage:
    view-cart
    CART_STORAGE_BACKEND=redis REDIS_HOST=localhost view-cart
"""

import sys
from typing import Optional

from cart_store.config import Settings
from cart_store.exceptions import CartDataError, StorageError
from cart_store.models import CartState, load_items
from cart_store.storage import RedisCartStorage, build_storage
from cart_store.summary import PricingRules, summarize


def main(settings: Optional[Settings] = None) -> int:
    settings = settings or Settings()
    storage = build_storage(settings)

    try:
        raw = storage.read()
        ttl = storage.time_to_live() if isinstance(storage, RedisCartStorage) else None
    except StorageError as e:
        print(f"❌ Failed to read saved cart: {e}")
        if settings.cart_storage_backend == "redis":
            print("Make sure Redis is running: docker-compose up redis -d")
        return 1

    if raw is None:
        print(f"No saved cart found in {settings.cart_storage_backend} slot '{settings.cart_storage_key}'.")
        return 0

    try:
        state = CartState(items=load_items(raw))
    except CartDataError as e:
        print(f"⚠️  Saved cart is corrupt and will be discarded on next start: {e}")
        return 0

    summary = summarize(state, PricingRules.from_settings(settings))

    print(f"✅ Saved cart with {len(state.items)} line(s):\n")
    if ttl is not None:
        print(f"⏱️  TTL: {ttl} seconds remaining")
    for item in state.items:
        line = f"🛒 {item.product_name} ({item.variant_name}) x{item.quantity} @ {item.unit_price} = {item.line_total}"
        if item.backordered_quantity:
            line += f"  [{item.backordered_quantity} backordered]"
        print(line)
    print("-" * 50)
    print(f"Items:    {summary.item_count}")
    print(f"Subtotal: {summary.subtotal}")
    print(f"Shipping: {summary.shipping}")
    print(f"Tax:      {summary.tax}")
    print(f"Total:    {summary.total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
