"""Order placement: command and handler.

Every placement validates the address, prices each line against the
catalogue and writes one complete order. Nothing is written when any of
those steps fails.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.errors import InvalidAddress
from ordering.order.order import Order, PaymentType, ShippingAddress
from ordering.order.pricing import OrderLine, price_order
from ordering.product.lookup import price_of


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    shipping_address = Text()  # JSON: address dict
    payment_type = String(required=True, choices=PaymentType)


def _load(value):
    return json.loads(value) if isinstance(value, str) else value


def parse_lines(items_data) -> list[OrderLine]:
    lines = []
    for item in items_data or []:
        quantity = item.get("quantity")
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive whole number"]})
        lines.append(OrderLine(product_id=str(item.get("product_id")), quantity=quantity))
    return lines


def build_address(address_data) -> ShippingAddress:
    if not address_data:
        raise InvalidAddress()
    try:
        return ShippingAddress(**address_data)
    except ValidationError as exc:
        fields = ", ".join(sorted(exc.messages))
        raise InvalidAddress(f"Shipping address is incomplete: {fields}") from exc


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        address = build_address(_load(command.shipping_address))
        lines = parse_lines(_load(command.items))
        pricing = price_order(lines, price_of)

        order = Order.place(
            customer_id=command.customer_id,
            pricing=pricing,
            shipping_address=address,
            payment_type=PaymentType(command.payment_type),
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            payment_type=command.payment_type,
            amount=order.amount,
        )
        return str(order.id)
