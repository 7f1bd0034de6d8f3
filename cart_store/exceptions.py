"""Exception hierarchy for the cart store.

None of these ever reach the caller of a cart command: CartStore catches them,
logs them and falls back to the in-memory state.
"""


class CartStoreError(Exception):
    """Base class for cart store errors."""


class CartDataError(CartStoreError):
    """Persisted cart data could not be parsed into line items."""


class StorageError(CartStoreError):
    """The persistent storage backend failed to read, write or delete."""
