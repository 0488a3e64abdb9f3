"""Seller-side order administration: payment override and status changes."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class SetPaymentStatus:
    """Set the paid flag of an order by hand, for either payment type."""

    order_id = Identifier(required=True)
    is_paid = Boolean(required=True)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)


@ordering.command_handler(part_of=Order)
class OrderAdministrationHandler:
    @handle(SetPaymentStatus)
    def set_payment_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.set_payment_status(command.is_paid)
        repo.add(order)
        logger.info("payment_status_overridden", order_id=str(order.id), is_paid=command.is_paid)

    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(command.status)
        repo.add(order)
