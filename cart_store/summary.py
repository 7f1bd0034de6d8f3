"""Order summary shown on the cart and checkout pages: shipping, tax and grand total."""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict

from cart_store.config import Settings
from cart_store.models import CartState

CENT = Decimal("0.01")


class PricingRules(BaseModel):
    """Shipping and tax rules applied on top of the cart subtotal."""

    model_config = ConfigDict(frozen=True)

    free_shipping_threshold: Decimal = Decimal("50")
    shipping_fee: Decimal = Decimal("9.99")
    tax_rate: Decimal = Decimal("0.08")

    @classmethod
    def from_settings(cls, settings: Settings) -> "PricingRules":
        return cls(
            free_shipping_threshold=settings.free_shipping_threshold,
            shipping_fee=settings.shipping_fee,
            tax_rate=settings.tax_rate,
        )


class CartSummary(BaseModel):
    item_count: int
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


def summarize(state: CartState, rules: PricingRules = PricingRules()) -> CartSummary:
    """Price a cart snapshot. An empty cart ships for free."""
    subtotal = state.total_amount

    if not state.items or subtotal >= rules.free_shipping_threshold:
        shipping = Decimal("0")
    else:
        shipping = rules.shipping_fee

    tax = (subtotal * rules.tax_rate).quantize(CENT, rounding=ROUND_HALF_UP)

    return CartSummary(
        item_count=state.total_item_count,
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
    )
