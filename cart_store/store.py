"""
store.py - Shopping Cart State Container

PURPOSE:
    Owns the canonical cart for one process: applies commands through the
    pure reducer, notifies subscribers with each new snapshot and mirrors the
    item list to a persistent slot so the cart survives restarts.

LIFECYCLE:
    1. Construction: start empty, then hydrate once from the storage slot
    2. Commands (add, remove, set_quantity, clear): reduce -> commit ->
       notify subscribers -> persist items
    3. close(): wait for the last write and release the persist worker

FAILURE SEMANTICS:
    - No command or query raises
    - Unreadable or corrupt saved data yields an empty cart (logged); a
      corrupt slot is deleted so it is not read again
    - Write failures are logged; the in-memory state stays authoritative
    - A failing subscriber is logged and skipped

THREADING:
    Commands are expected to come from a single thread. With an executor,
    writes run in the background; pass a single-worker executor so they land
    in command order.

Example Usage:
    ```python
    store = CartStore(FileCartStorage(".cart/brightbuy_cart.json"))
    unsubscribe = store.subscribe(lambda state: print(state.total_amount))

    phone = ProductVariant(variant_id=1, product_id=10, product_name="Phone",
                           variant_name="Black", unit_price=Decimal("500"), available_stock=5)
    store.add(phone)              # 1 x Phone, total 500
    store.add(phone)              # 2 x Phone, total 1000
    store.set_quantity(1, 5)      # 5 x Phone, total 2500
    store.quantity_of(1)          # 5
    store.remove(1)               # empty
    ```
"""

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

from cart_store.actions import Action, AddItem, ClearCart, LoadCart, RemoveItem, UpdateQuantity
from cart_store.config import Settings
from cart_store.exceptions import CartDataError, StorageError
from cart_store.models import CartState, LineItem, ProductVariant, dump_items, load_items
from cart_store.reducer import reduce
from cart_store.storage import CartStorage, build_storage
from cart_store.summary import CartSummary, PricingRules, summarize

logger = logging.getLogger(__name__)

Subscriber = Callable[[CartState], None]


class CartStore:
    """Shopping cart state container with best-effort persistence."""

    def __init__(
        self,
        storage: CartStorage,
        *,
        executor: Optional[Executor] = None,
        pricing: Optional[PricingRules] = None,
        own_executor: bool = False,
    ):
        self.storage = storage
        self.pricing = pricing or PricingRules()
        self._executor = executor
        self._own_executor = own_executor
        self._pending_write: Optional[Future] = None
        self._subscribers: List[Subscriber] = []
        self._state = CartState.empty()
        self._hydrate()

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> Tuple[LineItem, ...]:
        return self._state.items

    @property
    def total_item_count(self) -> int:
        return self._state.total_item_count

    @property
    def total_amount(self) -> Decimal:
        return self._state.total_amount

    def add(self, variant: ProductVariant, quantity: int = 1) -> None:
        """Add quantity units of variant, merging into an existing line."""
        self._dispatch(AddItem(item=variant, quantity=quantity))
        logger.info(f"Added {quantity} x variant {variant.variant_id} to cart", extra={"event_type": "cart.item_added"})

    def remove(self, variant_id: int) -> None:
        """Remove the line for variant_id. Absent ids are ignored."""
        self._dispatch(RemoveItem(variant_id=variant_id))
        logger.info(f"Removed variant {variant_id} from cart", extra={"event_type": "cart.item_removed"})

    def set_quantity(self, variant_id: int, quantity: int) -> None:
        """Overwrite a line's quantity; quantity <= 0 removes the line."""
        self._dispatch(UpdateQuantity(variant_id=variant_id, quantity=quantity))
        logger.info(f"Set quantity of variant {variant_id} to {quantity}", extra={"event_type": "cart.quantity_updated"})

    def clear(self) -> None:
        self._dispatch(ClearCart())
        logger.info("Cleared cart", extra={"event_type": "cart.cleared"})

    def quantity_of(self, variant_id: int) -> int:
        item = self._state.find(variant_id)
        return item.quantity if item is not None else 0

    def contains(self, variant_id: int) -> bool:
        return self._state.find(variant_id) is not None

    def summary(self, pricing: Optional[PricingRules] = None) -> CartSummary:
        """Price the current cart with the store's rules, or with pricing when given."""
        return summarize(self._state, pricing or self.pricing)

    def backorders(self) -> Dict[int, int]:
        """Variant id -> units beyond advisory stock, for lines that exceed it."""
        return {item.variant_id: item.backordered_quantity for item in self._state.items if item.backordered_quantity > 0}

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call callback with every committed state. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def flush(self) -> None:
        """Block until the most recently scheduled write has finished."""
        pending = self._pending_write
        if pending is not None:
            pending.result()

    def close(self) -> None:
        self.flush()
        if self._executor is not None and self._own_executor:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "CartStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _dispatch(self, action: Action) -> None:
        self._state = reduce(self._state, action)
        self._notify()
        self._persist()

    def _hydrate(self) -> None:
        try:
            raw = self.storage.read()
        except Exception as e:
            logger.warning(f"Could not read saved cart, starting empty: {e}")
            return

        if raw is None:
            logger.info("No saved cart found, starting empty")
            return

        try:
            items = load_items(raw)
        except CartDataError as e:
            logger.error(f"Discarding corrupt saved cart: {e}")
            self._discard_saved_cart()
            return

        self._state = reduce(self._state, LoadCart(items=items))
        logger.info(f"Loaded saved cart with {len(items)} line(s)")

    def _discard_saved_cart(self) -> None:
        try:
            self.storage.delete()
        except Exception as e:
            logger.warning(f"Failed to delete corrupt saved cart: {e}")

    def _notify(self) -> None:
        state = self._state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception as e:
                logger.error(f"Cart subscriber {callback!r} failed: {e}", exc_info=True)

    def _persist(self) -> None:
        data = dump_items(self._state.items)

        if self._executor is None:
            self._write(data)
            return

        try:
            self._pending_write = self._executor.submit(self._write, data)
        except RuntimeError:
            # Executor already shut down; fall back to writing inline.
            self._write(data)

    def _write(self, data: str) -> None:
        try:
            self.storage.write(data)
        except StorageError as e:
            logger.warning(f"Failed to persist cart: {e}")
        except Exception as e:
            logger.error(f"Unexpected error persisting cart: {e}", exc_info=True)
        else:
            logger.debug(f"Persisted cart ({len(data)} bytes)")


def create_cart_store(settings: Optional[Settings] = None) -> CartStore:
    """Build a CartStore wired to the storage and pricing described by settings."""
    settings = settings or Settings()
    storage = build_storage(settings)

    executor = None
    if settings.cart_persist_async:
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cart-persist")

    return CartStore(
        storage,
        executor=executor,
        pricing=PricingRules.from_settings(settings),
        own_executor=executor is not None,
    )
