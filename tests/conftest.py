"""Pytest configuration and fixtures"""
from decimal import Decimal

import pytest

from cart_store.models import ProductVariant
from cart_store.storage import MemoryCartStorage
from cart_store.store import CartStore


@pytest.fixture
def phone():
    """Phone variant from the storefront catalog"""
    return ProductVariant(
        variant_id=1,
        product_id=10,
        product_name="Phone",
        variant_name="Black",
        unit_price=Decimal("500"),
        image="/images/phone-black.png",
        available_stock=5,
    )


@pytest.fixture
def case():
    """Cheap accessory, below the free shipping threshold"""
    return ProductVariant(
        variant_id=2,
        product_id=11,
        product_name="Phone Case",
        variant_name="Clear",
        unit_price=Decimal("19.99"),
        available_stock=100,
    )


@pytest.fixture
def charger():
    """Out-of-stock variant (backorders allowed)"""
    return ProductVariant(
        variant_id=3,
        product_id=12,
        product_name="Charger",
        variant_name="USB-C 30W",
        unit_price=Decimal("24.50"),
        available_stock=0,
    )


@pytest.fixture
def memory_storage():
    return MemoryCartStorage()


@pytest.fixture
def store(memory_storage):
    cart = CartStore(memory_storage)
    yield cart
    cart.close()


@pytest.fixture
def saved_items_json():
    """Slot contents as written by an earlier session"""
    return (
        '[{"variantId": 1, "productId": 10, "productName": "Phone", "variantName": "Black",'
        ' "price": "500", "quantity": 2, "image": "/images/phone-black.png", "availableStock": 5},'
        ' {"variantId": 2, "productId": 11, "productName": "Phone Case", "variantName": "Clear",'
        ' "price": "19.99", "quantity": 1, "availableStock": 100}]'
    )
