"""Domain events for the Order aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A buyer placed an order; the amount due is fixed from this point on."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    payment_type = String(required=True, max_length=10)
    subtotal = Integer(required=True)
    tax = Integer(required=True)
    amount = Integer(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderPaid:
    """The payment gateway confirmed payment for an online order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    transaction_id = String(max_length=255)
    amount = Integer(required=True)
    paid_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentStatusOverridden:
    """An operator set the paid flag by hand."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_is_paid = Boolean(required=True)
    is_paid = Boolean(required=True)
    overridden_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(max_length=50)
    status = String(required=True, max_length=50)
    updated_at = DateTime(required=True)
