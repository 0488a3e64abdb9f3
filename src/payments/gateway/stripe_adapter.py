"""Stripe payment gateway adapter.

Uses the stripe-python SDK: hosted Checkout Sessions for payment, and
``stripe.Webhook.construct_event`` for verifying webhook signatures.
"""

import stripe

from payments.gateway.port import (
    CheckoutSession,
    GatewayError,
    GatewayEvent,
    LineItem,
    PaymentGateway,
    SignatureVerificationError,
    to_gateway_event,
)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, webhook_secret: str) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        stripe.api_key = api_key

    def create_checkout_session(
        self,
        line_items: list[LineItem],
        currency: str,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                mode="payment",
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "product_data": {"name": item.name},
                            "unit_amount": item.unit_amount,
                        },
                        "quantity": item.quantity,
                    }
                    for item in line_items
                ],
                metadata=metadata,
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as exc:
            raise GatewayError(str(exc)) from exc

        return CheckoutSession(session_id=session.id, url=session.url, metadata=dict(metadata))

    def construct_event(self, payload: bytes, signature: str | None) -> GatewayEvent:
        if not signature:
            raise SignatureVerificationError("Missing webhook signature")
        try:
            event = stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except stripe.SignatureVerificationError as exc:
            raise SignatureVerificationError(str(exc)) from exc
        except ValueError as exc:
            raise SignatureVerificationError("Webhook payload is not valid JSON") from exc

        return to_gateway_event(event["type"], event["data"]["object"].get("id"))

    def find_session_metadata(self, transaction_id: str) -> dict | None:
        if not transaction_id:
            return None
        try:
            sessions = stripe.checkout.Session.list(payment_intent=transaction_id, limit=1)
        except stripe.StripeError as exc:
            raise GatewayError(str(exc)) from exc

        if not sessions.data:
            return None
        return dict(sessions.data[0].metadata or {})
