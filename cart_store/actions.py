"""
actions.py - Cart Action Definitions

Every change to a cart is described by one of these actions and applied by
cart_store.reducer.reduce. They carry data only; applying them has no side
effects.

ACTIONS:
    - AddItem: add a variant, or raise the quantity of an existing line
    - RemoveItem: drop a line by variant id
    - UpdateQuantity: overwrite a line's quantity (<= 0 removes it)
    - ClearCart: empty the cart
    - LoadCart: replace all items with a persisted collection (hydration)
"""

from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict

from cart_store.models import LineItem, ProductVariant


class CartAction(BaseModel):
    """Base class for all cart actions."""

    model_config = ConfigDict(frozen=True)


class AddItem(CartAction):
    item: ProductVariant
    quantity: int = 1


class RemoveItem(CartAction):
    variant_id: int


class UpdateQuantity(CartAction):
    variant_id: int
    quantity: int


class ClearCart(CartAction):
    pass


class LoadCart(CartAction):
    items: Tuple[LineItem, ...] = ()


Action = Union[AddItem, RemoveItem, UpdateQuantity, ClearCart, LoadCart]
