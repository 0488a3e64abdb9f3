"""Tests for invoice data built from an order."""

from ordering.order.order import Order, PaymentType, ShippingAddress
from ordering.order.pricing import OrderPricing, PricedLine
from ordering.reporting.invoice import invoice_for, invoice_number


def _order():
    lines = (
        PricedLine(product_id="prod-a", name="Basmati Rice", category="Grains", unit_price=100, quantity=2),
        PricedLine(product_id="prod-b", name="Red Lentils", category="Grains", unit_price=50, quantity=1),
    )
    return Order.place(
        customer_id="buyer-001",
        pricing=OrderPricing(lines=lines, subtotal=250, tax=25, amount=275),
        shipping_address=ShippingAddress(street="12 Lake Road", city="Dhaka", country="Bangladesh"),
        payment_type=PaymentType.COD,
    )


class TestInvoiceNumber:
    def test_uses_last_eight_characters_upper_cased(self):
        assert invoice_number("6650a1b2c3d4e5f6abcdef12") == "INV-ABCDEF12"


class TestInvoiceFor:
    def test_totals_match_order(self):
        invoice = invoice_for(_order())
        assert invoice.subtotal == 250
        assert invoice.tax == 25
        assert invoice.total == 275

    def test_lines_in_order(self):
        invoice = invoice_for(_order())
        assert [line.name for line in invoice.lines] == ["Basmati Rice", "Red Lentils"]
        assert invoice.lines[0].total == 200

    def test_carries_address_and_payment_state(self):
        order = _order()
        invoice = invoice_for(order)
        assert invoice.address["city"] == "Dhaka"
        assert invoice.is_paid is False
        assert invoice.payment_type == "COD"
        assert invoice.number == invoice_number(order.id)
        assert invoice.issued_on == order.created_at.date()
