"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
Ordering code talks to this interface only, so FakeGateway (dev/test) and
StripeGateway (production) can be swapped without touching it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

PAYMENT_SUCCEEDED = "payment_intent.succeeded"
PAYMENT_FAILED = "payment_intent.payment_failed"


class GatewayError(Exception):
    """The gateway could not be reached or refused the request."""

    public_message = "Payment gateway is unavailable, please try again"


class SignatureVerificationError(Exception):
    """A webhook payload did not carry a valid signature."""


@dataclass(frozen=True)
class LineItem:
    """One priced line on a hosted checkout page, in minor units."""

    name: str
    unit_amount: int
    quantity: int

    @property
    def total(self) -> int:
        return self.unit_amount * self.quantity


@dataclass(frozen=True)
class CheckoutSession:
    session_id: str
    url: str
    metadata: dict = field(default_factory=dict)


# Verified gateway events. The transaction id is the gateway's payment
# reference, not the checkout session id.
@dataclass(frozen=True)
class PaymentSucceeded:
    transaction_id: str | None


@dataclass(frozen=True)
class PaymentFailed:
    transaction_id: str | None


@dataclass(frozen=True)
class UnhandledEvent:
    event_type: str


GatewayEvent = PaymentSucceeded | PaymentFailed | UnhandledEvent


def to_gateway_event(event_type: str, transaction_id: str | None) -> GatewayEvent:
    """Map a raw gateway event type onto the events ordering understands."""
    if event_type == PAYMENT_SUCCEEDED:
        return PaymentSucceeded(transaction_id=transaction_id)
    if event_type == PAYMENT_FAILED:
        return PaymentFailed(transaction_id=transaction_id)
    return UnhandledEvent(event_type=event_type)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_checkout_session(
        self,
        line_items: list[LineItem],
        currency: str,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Open a hosted checkout session. Raises GatewayError on failure."""
        ...

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str | None) -> GatewayEvent:
        """Verify a webhook payload and decode it.

        Raises SignatureVerificationError when the signature is missing or
        does not match the payload.
        """
        ...

    @abstractmethod
    def find_session_metadata(self, transaction_id: str) -> dict | None:
        """Return the metadata of the checkout session that produced a payment."""
        ...
