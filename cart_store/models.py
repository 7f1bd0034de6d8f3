"""
models.py - Cart Data Model

PURPOSE:
    Pydantic models for the shopping cart: the purchasable variant a caller
    hands to the cart, the line item the cart holds, and the immutable cart
    snapshot with its derived totals.

INVARIANTS:
    - A LineItem always has quantity >= 1
    - A CartState never holds two LineItems with the same variant_id
    - total_item_count and total_amount are computed from items on every
      access, so they cannot drift from the item list

WIRE FORMAT (persisted slot):
    [
        {"variantId": 1, "productId": 10, "productName": "Phone",
         "variantName": "Black", "price": "500", "quantity": 2,
         "image": "/img/phone.png", "availableStock": 5}
    ]

    - Aggregates are never stored; they are recomputed after hydration
    - "price" is written as a decimal string to keep cents exact
    - "stock" is accepted on read as the legacy name of "availableStock"
"""

import json
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, computed_field, model_validator

from cart_store.exceptions import CartDataError


class ProductVariant(BaseModel):
    """A purchasable product variant, as offered to the cart (no quantity)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    variant_id: int = Field(alias="variantId")
    product_id: int = Field(alias="productId")
    product_name: str = Field(alias="productName")
    variant_name: str = Field(alias="variantName")
    unit_price: Decimal = Field(alias="price", ge=0)
    image: Optional[str] = None
    # Advisory only: the cart never refuses a quantity above stock.
    available_stock: int = Field(
        ge=0,
        validation_alias=AliasChoices("availableStock", "stock", "available_stock"),
        serialization_alias="availableStock",
    )


class LineItem(ProductVariant):
    """One cart entry: a variant snapshot plus the chosen quantity."""

    quantity: int = Field(ge=1)

    @classmethod
    def from_variant(cls, variant: ProductVariant, quantity: int) -> "LineItem":
        """Create a line item from a variant, ignoring any quantity it carries."""
        return cls(**variant.model_dump(exclude={"quantity"}), quantity=quantity)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def backordered_quantity(self) -> int:
        """Units in this line beyond the advisory stock."""
        return max(0, self.quantity - self.available_stock)


class CartState(BaseModel):
    """Immutable cart snapshot. Every mutation produces a new instance."""

    model_config = ConfigDict(frozen=True)

    items: Tuple[LineItem, ...] = ()

    @model_validator(mode="after")
    def check_unique_variants(self) -> "CartState":
        seen = set()
        for item in self.items:
            if item.variant_id in seen:
                raise ValueError(f"Duplicate variant_id {item.variant_id} in cart")
            seen.add(item.variant_id)
        return self

    @computed_field
    @property
    def total_item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @computed_field
    @property
    def total_amount(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @classmethod
    def empty(cls) -> "CartState":
        return cls()

    def find(self, variant_id: int) -> Optional[LineItem]:
        for item in self.items:
            if item.variant_id == variant_id:
                return item
        return None


def dump_items(items: Iterable[LineItem]) -> str:
    """Serialize line items to the JSON array stored in the persistent slot."""
    return json.dumps([item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items])


def load_items(raw: str) -> Tuple[LineItem, ...]:
    """Parse the persisted JSON array back into line items.

    Raises CartDataError when the payload is not JSON, is not an array, holds
    an invalid record or repeats a variant.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise CartDataError(f"Persisted cart is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CartDataError(f"Persisted cart must be a JSON array, got {type(data).__name__}")

    try:
        return CartState(items=[LineItem.model_validate(record) for record in data]).items
    except ValidationError as e:
        raise CartDataError(f"Persisted cart has invalid items: {e.error_count()} error(s)") from e
