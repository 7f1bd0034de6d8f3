"""
service/main.py - Cart HTTP Service

PURPOSE:
    Exposes the process-local cart to presentation code over HTTP. Every
    endpoint is a thin wrapper over CartStore; the store is created at
    startup (or injected by the caller) and kept on app.state.

API ENDPOINTS:
    GET    /health                      - Health check endpoint
    GET    /cart                        - View cart contents and totals
    GET    /cart/summary                - Subtotal, shipping, tax and total
    POST   /cart/items                  - Add a variant (merges into an existing line)
    GET    /cart/items/{variant_id}     - Quantity of one variant and whether it is in the cart
    PUT    /cart/items/{variant_id}     - Set quantity (<= 0 removes the line)
    DELETE /cart/items/{variant_id}     - Remove a line (absent ids are ignored)
    DELETE /cart                        - Clear the cart

TESTING COMMANDS:
    1. Add a phone:
        curl -X POST http://localhost:8001/cart/items \
          -H "Content-Type: application/json" \
          -d '{"variantId": 1, "productId": 10, "productName": "Phone",
               "variantName": "Black", "price": "500", "availableStock": 5}'

    2. Set its quantity to 5:
        curl -X PUT http://localhost:8001/cart/items/1 \
          -H "Content-Type: application/json" -d '{"quantity": 5}'

    3. View the order summary:
        curl http://localhost:8001/cart/summary

USAGE:
    cart-service                  (console script)
    uvicorn cart_store.service.main:app --port 8001
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request, status

from cart_store.config import Settings
from cart_store.logging_config import setup_logging
from cart_store.service.schemas import (
    AddItemRequest,
    CartResponse,
    HealthResponse,
    ItemStatusResponse,
    UpdateQuantityRequest,
)
from cart_store.store import CartStore, create_cart_store
from cart_store.summary import CartSummary

logger = logging.getLogger(__name__)

SERVICE_NAME = "cart-service"
VERSION = "1.0.0"


def get_store(request: Request) -> CartStore:
    """Dependency returning the cart store owned by the running app."""
    return request.app.state.cart_store


def create_app(settings: Optional[Settings] = None, store: Optional[CartStore] = None) -> FastAPI:
    """Build the FastAPI app. A given store is used as-is and left open on shutdown."""
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage app lifecycle."""
        setup_logging(SERVICE_NAME, level=settings.log_level)
        logger.info("Starting Cart Service...")

        owns_store = store is None
        app.state.cart_store = store if store is not None else create_cart_store(settings)
        logger.info(f"Cart ready with {app.state.cart_store.total_item_count} item(s)")

        yield

        logger.info("Shutting down Cart Service...")
        if owns_store:
            app.state.cart_store.close()

    app = FastAPI(title="Cart Service", version=VERSION, lifespan=lifespan)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="ok", service=SERVICE_NAME, version=VERSION)

    @app.get("/cart", response_model=CartResponse)
    async def get_cart(cart: CartStore = Depends(get_store)) -> CartResponse:
        return CartResponse.from_state(cart.state)

    @app.get("/cart/summary", response_model=CartSummary)
    async def get_summary(cart: CartStore = Depends(get_store)) -> CartSummary:
        return cart.summary()

    @app.post("/cart/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
    async def add_item(request: AddItemRequest, cart: CartStore = Depends(get_store)) -> CartResponse:
        """Add a variant to the cart, merging into an existing line."""
        cart.add(request, quantity=request.quantity)

        backordered = cart.state.find(request.variant_id).backordered_quantity
        if backordered:
            logger.warning(f"Variant {request.variant_id} has {backordered} item(s) on backorder")

        return CartResponse.from_state(cart.state)

    @app.get("/cart/items/{variant_id}", response_model=ItemStatusResponse)
    async def get_item(variant_id: int, cart: CartStore = Depends(get_store)) -> ItemStatusResponse:
        return ItemStatusResponse(
            variant_id=variant_id,
            quantity=cart.quantity_of(variant_id),
            in_cart=cart.contains(variant_id),
        )

    @app.put("/cart/items/{variant_id}", response_model=CartResponse)
    async def update_item_quantity(
        variant_id: int, request: UpdateQuantityRequest, cart: CartStore = Depends(get_store)
    ) -> CartResponse:
        """Update item quantity in cart. If quantity is 0 or less, remove the item."""
        cart.set_quantity(variant_id, request.quantity)
        return CartResponse.from_state(cart.state)

    @app.delete("/cart/items/{variant_id}", response_model=CartResponse)
    async def remove_item(variant_id: int, cart: CartStore = Depends(get_store)) -> CartResponse:
        cart.remove(variant_id)
        return CartResponse.from_state(cart.state)

    @app.delete("/cart", response_model=CartResponse)
    async def clear_cart(cart: CartStore = Depends(get_store)) -> CartResponse:
        cart.clear()
        return CartResponse.from_state(cart.state)

    return app


app = create_app()


def main() -> None:
    settings = Settings()
    uvicorn.run("cart_store.service.main:app", host="0.0.0.0", port=settings.cart_service_port)
