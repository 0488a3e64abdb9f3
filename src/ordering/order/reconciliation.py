"""Payment reconciliation: apply verified gateway events to the order ledger.

A succeeded payment marks its order paid and empties the buyer's cart. A
failed payment deletes the order it was for, provided the order is still an
unpaid online order. Events are matched to orders through the metadata the
checkout session carried, and every step here is safe to repeat because
gateways redeliver webhooks.
"""

from enum import Enum

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.management import find_cart
from ordering.domain import logger, ordering
from ordering.order.order import Order
from payments.gateway import PaymentFailed, PaymentGateway, PaymentSucceeded, UnhandledEvent


class ReconciliationOutcome(Enum):
    PAID = "paid"
    DISCARDED = "discarded"
    IGNORED = "ignored"


@ordering.command(part_of="Order")
class ConfirmOnlinePayment:
    order_id = Identifier(required=True)
    customer_id = Identifier()
    transaction_id = String(max_length=255)


@ordering.command(part_of="Order")
class DiscardUnpaidOrder:
    order_id = Identifier(required=True)
    transaction_id = String(max_length=255)


def _find_order(order_id):
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        return None


@ordering.command_handler(part_of=Order)
class OnlinePaymentHandler:
    @handle(ConfirmOnlinePayment)
    def confirm_online_payment(self, command):
        order = _find_order(command.order_id)
        if order is None:
            logger.warning(
                "payment_for_unknown_order",
                order_id=str(command.order_id),
                transaction_id=command.transaction_id,
            )
            return ReconciliationOutcome.IGNORED

        order.mark_paid(command.transaction_id)
        current_domain.repository_for(Order).add(order)

        cart = find_cart(command.customer_id or order.customer_id)
        if cart is not None:
            cart.clear()
            current_domain.repository_for(ShoppingCart).add(cart)

        logger.info("order_paid", order_id=str(order.id), transaction_id=command.transaction_id)
        return ReconciliationOutcome.PAID

    @handle(DiscardUnpaidOrder)
    def discard_unpaid_order(self, command):
        order = _find_order(command.order_id)
        if order is None:
            logger.info("discard_skipped_missing_order", order_id=str(command.order_id))
            return ReconciliationOutcome.IGNORED

        if order.is_settled:
            logger.warning(
                "discard_skipped_settled_order",
                order_id=str(order.id),
                payment_type=order.payment_type,
                is_paid=order.is_paid,
                transaction_id=command.transaction_id,
            )
            return ReconciliationOutcome.IGNORED

        current_domain.repository_for(Order)._dao.delete(order)
        logger.info("order_discarded", order_id=str(order.id), transaction_id=command.transaction_id)
        return ReconciliationOutcome.DISCARDED


def reconcile(event, gateway: PaymentGateway) -> ReconciliationOutcome:
    """Apply one verified gateway event and report what happened to the ledger."""
    if isinstance(event, UnhandledEvent):
        logger.info("webhook_event_ignored", event_type=event.event_type)
        return ReconciliationOutcome.IGNORED
    if not isinstance(event, PaymentSucceeded | PaymentFailed):
        raise TypeError(f"Unsupported gateway event {event!r}")
    if not event.transaction_id:
        logger.warning("webhook_without_transaction", event_type=type(event).__name__)
        return ReconciliationOutcome.IGNORED

    metadata = gateway.find_session_metadata(event.transaction_id) or {}
    order_id = metadata.get("order_id")
    if not order_id:
        logger.warning("webhook_without_order", transaction_id=event.transaction_id)
        return ReconciliationOutcome.IGNORED

    if isinstance(event, PaymentSucceeded):
        command = ConfirmOnlinePayment(
            order_id=order_id,
            customer_id=metadata.get("customer_id"),
            transaction_id=event.transaction_id,
        )
    else:
        command = DiscardUnpaidOrder(order_id=order_id, transaction_id=event.transaction_id)

    return current_domain.process(command, asynchronous=False)
