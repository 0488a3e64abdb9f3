"""Order aggregate: the ledger record of one purchase.

An order is written once, complete, when the buyer checks out. Line items,
the shipping address snapshot and the money figures never change after that;
only the paid flag and the fulfilment status move.

Visibility:
    An order shows up in buyer and seller order history once it is settled,
    meaning it is cash-on-delivery or it has been paid. Online orders whose
    checkout never completed stay invisible.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)
from protean.utils.query import Q

from ordering.domain import ordering
from ordering.order.events import OrderPaid, OrderPlaced, OrderStatusUpdated, PaymentStatusOverridden

DEFAULT_STATUS = "Order Placed"


class PaymentType(Enum):
    COD = "COD"
    ONLINE = "Online"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """Where the order goes, copied from the buyer's address at checkout.

    The copy is what the order keeps: editing or deleting the buyer's saved
    address later does not touch past orders.
    """

    first_name = String(max_length=100)
    last_name = String(max_length=100)
    email = String(max_length=254)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zipcode = String(max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """One line of an order with the catalogue name and price seen at checkout."""

    line_number = Integer(required=True, min_value=1)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(max_length=100)
    unit_price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    subtotal = Integer(required=True, min_value=0)
    tax = Integer(required=True, min_value=0)
    amount = Integer(required=True, min_value=0)
    payment_type = String(required=True, choices=PaymentType)
    is_paid = Boolean(default=False)
    status = String(max_length=50, default=DEFAULT_STATUS)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def amount_is_subtotal_plus_tax(self):
        if None in (self.subtotal, self.tax, self.amount):
            return
        if self.amount != self.subtotal + self.tax:
            raise ValidationError({"amount": ["Amount must equal subtotal plus tax"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, pricing, shipping_address, payment_type):
        """Create a complete order from an already computed pricing.

        Args:
            customer_id: The buyer placing the order.
            pricing: OrderPricing with priced lines, subtotal, tax and amount.
            shipping_address: ShippingAddress value object.
            payment_type: PaymentType member.
        """
        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            shipping_address=shipping_address,
            subtotal=pricing.subtotal,
            tax=pricing.tax,
            amount=pricing.amount,
            payment_type=payment_type.value,
            is_paid=False,
            status=DEFAULT_STATUS,
            created_at=now,
            updated_at=now,
        )
        for number, line in enumerate(pricing.lines, start=1):
            order.add_items(
                OrderItem(
                    line_number=number,
                    product_id=line.product_id,
                    name=line.name,
                    category=line.category,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                payment_type=payment_type.value,
                subtotal=pricing.subtotal,
                tax=pricing.tax,
                amount=pricing.amount,
                item_count=len(pricing.lines),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_settled(self):
        return self.payment_type == PaymentType.COD.value or bool(self.is_paid)

    @property
    def is_online(self):
        return self.payment_type == PaymentType.ONLINE.value

    def ordered_items(self):
        return sorted(self.items, key=lambda item: item.line_number)

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def mark_paid(self, transaction_id=None):
        """Record a confirmed gateway payment. Repeating it changes nothing."""
        if self.is_paid:
            return

        now = datetime.now(UTC)
        self.is_paid = True
        self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                transaction_id=transaction_id,
                amount=self.amount,
                paid_at=now,
            )
        )

    def set_payment_status(self, is_paid):
        """Operator override: set the paid flag to exactly the given value."""
        previous = bool(self.is_paid)
        now = datetime.now(UTC)
        self.is_paid = is_paid
        self.updated_at = now

        self.raise_(
            PaymentStatusOverridden(
                order_id=str(self.id),
                previous_is_paid=previous,
                is_paid=is_paid,
                overridden_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Fulfilment
    # -------------------------------------------------------------------
    def update_status(self, status):
        if not status or not status.strip():
            raise ValidationError({"status": ["Status cannot be blank"]})

        previous = self.status
        now = datetime.now(UTC)
        self.status = status.strip()
        self.updated_at = now

        self.raise_(
            OrderStatusUpdated(
                order_id=str(self.id),
                previous_status=previous,
                status=self.status,
                updated_at=now,
            )
        )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------
_SETTLED = Q(payment_type=PaymentType.COD.value) | Q(is_paid=True)


@ordering.repository(part_of=Order)
class OrderRepository:
    """Order lookups for order history.

    Both listings return settled orders only, newest first.
    """

    def settled_for_customer(self, customer_id) -> list[Order]:
        return (
            self._dao.query.filter(_SETTLED, customer_id=str(customer_id)).order_by("-created_at").all().items
        )

    def settled(self) -> list[Order]:
        return self._dao.query.filter(_SETTLED).order_by("-created_at").all().items
