"""
Tests for cart data models and the persisted wire format
"""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from cart_store.exceptions import CartDataError
from cart_store.models import CartState, LineItem, ProductVariant, dump_items, load_items


class TestLineItem:
    """Tests for LineItem"""

    def test_from_variant_sets_quantity(self, phone):
        item = LineItem.from_variant(phone, 3)

        assert item.variant_id == 1
        assert item.product_name == "Phone"
        assert item.quantity == 3
        assert item.line_total == Decimal("1500")

    def test_from_variant_ignores_quantity_of_line_item(self, phone):
        existing = LineItem.from_variant(phone, 7)

        assert LineItem.from_variant(existing, 1).quantity == 1

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_rejects_non_positive_quantity(self, phone, quantity):
        with pytest.raises(ValidationError):
            LineItem.from_variant(phone, quantity)

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError):
            ProductVariant(variant_id=1, product_id=1, product_name="X", variant_name="Y", unit_price=Decimal("-1"), available_stock=1)

    def test_backordered_quantity(self, phone, charger):
        assert LineItem.from_variant(phone, 5).backordered_quantity == 0
        assert LineItem.from_variant(phone, 7).backordered_quantity == 2
        assert LineItem.from_variant(charger, 1).backordered_quantity == 1

    def test_accepts_wire_names(self):
        item = LineItem.model_validate(
            {"variantId": 4, "productId": 9, "productName": "Tablet", "variantName": "64GB",
             "price": "299.99", "quantity": 1, "availableStock": 3}
        )

        assert item.unit_price == Decimal("299.99")
        assert item.available_stock == 3
        assert item.image is None

    def test_accepts_legacy_stock_key(self):
        item = LineItem.model_validate(
            {"variantId": 4, "productId": 9, "productName": "Tablet", "variantName": "64GB",
             "price": 299, "quantity": 1, "stock": 8}
        )

        assert item.available_stock == 8


class TestCartState:
    """Tests for CartState aggregates and invariants"""

    def test_empty(self):
        state = CartState.empty()

        assert state.items == ()
        assert state.total_item_count == 0
        assert state.total_amount == Decimal("0")

    def test_totals_are_derived_from_items(self, phone, case):
        state = CartState(items=[LineItem.from_variant(phone, 2), LineItem.from_variant(case, 3)])

        assert state.total_item_count == 5
        assert state.total_amount == Decimal("1059.97")

    def test_rejects_duplicate_variants(self, phone):
        with pytest.raises(ValidationError):
            CartState(items=[LineItem.from_variant(phone, 1), LineItem.from_variant(phone, 2)])

    def test_find(self, phone, case):
        state = CartState(items=[LineItem.from_variant(phone, 1)])

        assert state.find(1).product_name == "Phone"
        assert state.find(case.variant_id) is None

    def test_is_immutable(self, phone):
        state = CartState(items=[LineItem.from_variant(phone, 1)])

        with pytest.raises(ValidationError):
            state.items = ()


class TestSerialization:
    """Tests for the persisted slot format"""

    def test_dump_uses_wire_names_without_totals(self, phone):
        data = json.loads(dump_items([LineItem.from_variant(phone, 2)]))

        assert data == [
            {
                "variantId": 1,
                "productId": 10,
                "productName": "Phone",
                "variantName": "Black",
                "price": "500",
                "image": "/images/phone-black.png",
                "availableStock": 5,
                "quantity": 2,
            }
        ]

    def test_dump_omits_missing_image(self, case):
        data = json.loads(dump_items([LineItem.from_variant(case, 1)]))

        assert "image" not in data[0]

    def test_load_restores_order_and_fields(self, phone, case):
        items = (LineItem.from_variant(case, 3), LineItem.from_variant(phone, 1))

        restored = load_items(dump_items(items))

        assert restored == items
        assert CartState(items=restored).total_amount == CartState(items=items).total_amount

    def test_load_saved_slot(self, saved_items_json):
        items = load_items(saved_items_json)

        assert [item.variant_id for item in items] == [1, 2]
        assert CartState(items=items).total_amount == Decimal("1019.99")

    def test_load_empty_array(self):
        assert load_items("[]") == ()

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "{\"variantId\": 1}",
            "null",
            "[{\"variantId\": 1}]",
            "[{\"variantId\": 1, \"productId\": 1, \"productName\": \"A\", \"variantName\": \"B\", \"price\": 1, \"quantity\": 0}]",
        ],
    )
    def test_load_rejects_malformed_data(self, raw):
        with pytest.raises(CartDataError):
            load_items(raw)

    def test_load_rejects_duplicate_variants(self, phone):
        record = LineItem.from_variant(phone, 1).model_dump(mode="json", by_alias=True)

        with pytest.raises(CartDataError):
            load_items(json.dumps([record, record]))

    def test_load_rejects_record_without_stock(self):
        raw = json.dumps(
            [{"variantId": 1, "productId": 10, "productName": "Phone", "variantName": "Black",
              "price": 500, "quantity": 2}]
        )

        with pytest.raises(CartDataError):
            load_items(raw)

    def test_load_rejects_deeply_nested_json(self):
        with pytest.raises(CartDataError):
            load_items("[" * 100000 + "]" * 100000)
