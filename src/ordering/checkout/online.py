"""Online checkout: open a hosted payment session for a placed order.

The session is built from the stored order, never from the request, so the
amount the gateway collects is the ledger's amount due. Line items carry the
snapshot unit prices; tax goes on one extra line equal to the ledger tax.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from ordering.domain import logger
from ordering.order.order import Order
from payments.gateway import CheckoutSession, GatewayError, LineItem, PaymentGateway

TAX_LINE_NAME = "Tax"
DEFAULT_CURRENCY = "bdt"


@dataclass(frozen=True)
class CheckoutStarted:
    order_id: str
    session_id: str
    url: str


class CheckoutFailed(GatewayError):
    """The gateway refused to open a session for a placed order."""

    public_message = "Payment could not be started, please try again"

    def __init__(self, order_id, reason):
        self.order_id = str(order_id)
        self.reason = str(reason)
        super().__init__(f"Could not start payment for order {order_id}: {reason}")


def line_items_for(order: Order) -> list[LineItem]:
    items = [
        LineItem(name=item.name, unit_amount=item.unit_price, quantity=item.quantity)
        for item in order.ordered_items()
    ]
    if order.tax:
        items.append(LineItem(name=TAX_LINE_NAME, unit_amount=order.tax, quantity=1))
    return items


def start_checkout(order_id, origin: str, gateway: PaymentGateway) -> CheckoutStarted:
    """Ask the gateway for a checkout session covering ``order_id``.

    Raises CheckoutFailed when the gateway call fails. The order stays in the
    ledger unpaid, and hidden from listings, in that case.
    """
    order = current_domain.repository_for(Order).get(str(order_id))
    origin = origin.rstrip("/")
    currency = (current_domain.config.get("custom") or {}).get("currency", DEFAULT_CURRENCY)

    try:
        session: CheckoutSession = gateway.create_checkout_session(
            line_items=line_items_for(order),
            currency=currency,
            metadata={"order_id": str(order.id), "customer_id": str(order.customer_id)},
            success_url=f"{origin}/loader?next=my-orders",
            cancel_url=f"{origin}/cart",
        )
    except GatewayError as exc:
        logger.error("checkout_session_failed", order_id=str(order.id), error=str(exc))
        raise CheckoutFailed(order.id, exc) from exc

    logger.info("checkout_session_created", order_id=str(order.id), session_id=session.session_id)
    return CheckoutStarted(order_id=str(order.id), session_id=session.session_id, url=session.url)
