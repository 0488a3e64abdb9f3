"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing (``PAYMENT_GATEWAY=fake``, default)
- StripeGateway for production (``PAYMENT_GATEWAY=stripe``)

The fake is only built when ``PROTEAN_ENV`` is development or test.
"""

import os

from payments.gateway.fake_adapter import DEFAULT_WEBHOOK_SECRET, FakeGateway
from payments.gateway.port import (
    CheckoutSession,
    GatewayError,
    GatewayEvent,
    LineItem,
    PaymentFailed,
    PaymentGateway,
    PaymentSucceeded,
    SignatureVerificationError,
    UnhandledEvent,
)
from payments.gateway.stripe_adapter import StripeGateway

__all__ = [
    "CheckoutSession",
    "FakeGateway",
    "GatewayError",
    "GatewayEvent",
    "LineItem",
    "PaymentFailed",
    "PaymentGateway",
    "PaymentSucceeded",
    "SignatureVerificationError",
    "StripeGateway",
    "UnhandledEvent",
    "get_gateway",
    "reset_gateway",
    "set_gateway",
]

FAKE_ENVIRONMENTS = ("development", "test")

_current_gateway: PaymentGateway | None = None


def _build_gateway() -> PaymentGateway:
    kind = os.getenv("PAYMENT_GATEWAY", "fake").lower()
    if kind == "stripe":
        api_key = os.getenv("STRIPE_SECRET_KEY")
        webhook_secret = os.getenv("STRIPE_WEBHOOK_SECRET")
        if not api_key or not webhook_secret:
            raise RuntimeError("STRIPE_SECRET_KEY and STRIPE_WEBHOOK_SECRET must be set for the stripe gateway")
        return StripeGateway(api_key=api_key, webhook_secret=webhook_secret)
    if kind != "fake":
        raise RuntimeError(f"Unknown PAYMENT_GATEWAY {kind!r}")

    env = (os.getenv("PROTEAN_ENV") or "development").lower()
    if env not in FAKE_ENVIRONMENTS:
        raise RuntimeError(
            f"The fake payment gateway cannot be used with PROTEAN_ENV={env!r}; set PAYMENT_GATEWAY=stripe"
        )
    return FakeGateway(webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET", DEFAULT_WEBHOOK_SECRET))


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building it from the environment on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
