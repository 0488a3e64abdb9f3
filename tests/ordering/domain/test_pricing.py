"""Tests for order pricing: subtotal, flat tax and amount due."""

import pytest
from ordering.order.errors import EmptyOrder, InvalidReference
from ordering.order.pricing import OrderLine, compute_tax, price_order
from ordering.product.lookup import ProductPrice

CATALOGUE = {
    "prod-a": ProductPrice(product_id="prod-a", name="Basmati Rice", category="Grains", unit_price=100),
    "prod-b": ProductPrice(product_id="prod-b", name="Red Lentils", category="Grains", unit_price=50),
    "prod-c": ProductPrice(product_id="prod-c", name="Mustard Oil", category="Oils", unit_price=333),
}


def catalogue_price(product_id):
    try:
        return CATALOGUE[product_id]
    except KeyError:
        raise InvalidReference(product_id) from None


class TestComputeTax:
    def test_ten_percent_of_round_subtotal(self):
        assert compute_tax(250) == 25

    def test_rounds_down_to_minor_unit(self):
        assert compute_tax(999) == 99
        assert compute_tax(9) == 0

    def test_zero_subtotal(self):
        assert compute_tax(0) == 0


class TestPriceOrder:
    def test_two_lines_scenario(self):
        pricing = price_order(
            [OrderLine(product_id="prod-a", quantity=2), OrderLine(product_id="prod-b", quantity=1)],
            catalogue_price,
        )
        assert pricing.subtotal == 250
        assert pricing.tax == 25
        assert pricing.amount == 275

    def test_amount_is_independent_of_line_order(self):
        lines = [
            OrderLine(product_id="prod-a", quantity=3),
            OrderLine(product_id="prod-b", quantity=2),
            OrderLine(product_id="prod-c", quantity=1),
        ]
        forward = price_order(lines, catalogue_price)
        backward = price_order(list(reversed(lines)), catalogue_price)
        assert forward.amount == backward.amount

    def test_amount_is_subtotal_plus_floored_tax(self):
        pricing = price_order([OrderLine(product_id="prod-c", quantity=1)], catalogue_price)
        assert pricing.subtotal == 333
        assert pricing.tax == 33
        assert pricing.amount == 366

    def test_lines_keep_catalogue_snapshot(self):
        pricing = price_order([OrderLine(product_id="prod-b", quantity=4)], catalogue_price)
        line = pricing.lines[0]
        assert line.name == "Red Lentils"
        assert line.unit_price == 50
        assert line.line_total == 200

    def test_each_line_is_looked_up(self):
        seen = []

        def tracking_price(product_id):
            seen.append(product_id)
            return catalogue_price(product_id)

        price_order(
            [OrderLine(product_id="prod-a", quantity=1), OrderLine(product_id="prod-a", quantity=2)],
            tracking_price,
        )
        assert seen == ["prod-a", "prod-a"]

    def test_empty_lines_rejected(self):
        with pytest.raises(EmptyOrder) as exc:
            price_order([], catalogue_price)
        assert "items" in exc.value.messages

    def test_unknown_product_rejected(self):
        with pytest.raises(InvalidReference) as exc:
            price_order([OrderLine(product_id="missing", quantity=1)], catalogue_price)
        assert exc.value.product_id == "missing"
