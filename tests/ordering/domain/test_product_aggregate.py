"""Tests for the Product aggregate."""

import pytest
from ordering.product.events import ProductAdded, ProductUpdated, StockChanged
from ordering.product.product import Product
from protean.exceptions import ValidationError


def _product(**overrides):
    defaults = {"name": "Fresh Milk", "category": "Dairy", "price": 90, "offer_price": 80}
    defaults.update(overrides)
    return Product.add(**defaults)


class TestProductAdd:
    def test_add_sets_fields(self):
        product = _product(description="1 litre")
        assert product.name == "Fresh Milk"
        assert product.description == "1 litre"
        assert product.in_stock is True
        assert product.created_at is not None

    def test_add_raises_product_added(self):
        product = _product()
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.offer_price == 80

    def test_offer_price_above_price_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _product(price=80, offer_price=90)
        assert "offer_price" in exc.value.messages

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError):
            _product(price=0, offer_price=0)


class TestProductChanges:
    def test_update_details(self):
        product = _product()
        product.update_details(name="Fresh Milk 2L", category="Dairy", price=170, offer_price=150)
        assert product.name == "Fresh Milk 2L"
        assert product.offer_price == 150
        assert isinstance(product._events[-1], ProductUpdated)

    def test_update_cannot_break_offer_price_rule(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.update_details(name="Fresh Milk", category="Dairy", price=50, offer_price=80)

    def test_change_stock(self):
        product = _product()
        product.change_stock(False)
        assert product.in_stock is False
        event = product._events[-1]
        assert isinstance(event, StockChanged)
        assert event.in_stock is False
