from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from cart_store.models import CartState, LineItem, ProductVariant


class AddItemRequest(ProductVariant):
    """Request model for adding a variant to the cart."""

    quantity: int = Field(default=1, ge=1)


class UpdateQuantityRequest(BaseModel):
    """Request model for updating item quantity. Zero or less removes the item."""

    quantity: int


class CartResponse(BaseModel):
    """Response model for the cart."""

    model_config = ConfigDict(populate_by_name=True)

    items: List[LineItem]
    total_item_count: int = Field(alias="totalItems")
    total_amount: Decimal = Field(alias="totalAmount")

    @classmethod
    def from_state(cls, state: CartState) -> "CartResponse":
        return cls(
            items=list(state.items),
            total_item_count=state.total_item_count,
            total_amount=state.total_amount,
        )


class ItemStatusResponse(BaseModel):
    """Response model for a single variant lookup."""

    variant_id: int
    quantity: int
    in_cart: bool


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
