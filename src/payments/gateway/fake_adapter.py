"""Configurable fake payment gateway for development and testing.

This adapter simulates a hosted-checkout gateway without any external calls.
Sessions live in memory. Webhook payloads are signed with HMAC-SHA256 over
``"{timestamp}.{payload}"`` in Stripe's ``t=...,v1=...`` header format and
verified with the stripe SDK, so the webhook route exercises real signature
checks.

Typical test flow::

    gateway = FakeGateway()
    session = gateway.create_checkout_session(...)
    transaction_id = gateway.complete_session(session.session_id)
    payload, signature = gateway.signed_event(PAYMENT_SUCCEEDED, transaction_id)
"""

import hashlib
import hmac
import json
import time
from uuid import uuid4

import stripe

from payments.gateway.port import (
    PAYMENT_FAILED,
    PAYMENT_SUCCEEDED,
    CheckoutSession,
    GatewayError,
    GatewayEvent,
    LineItem,
    PaymentGateway,
    SignatureVerificationError,
    to_gateway_event,
)

DEFAULT_WEBHOOK_SECRET = "whsec_fake"
SIGNATURE_TOLERANCE = 300


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, webhook_secret: str = DEFAULT_WEBHOOK_SECRET) -> None:
        self.webhook_secret = webhook_secret
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.sessions: dict[str, dict] = {}
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    # -------------------------------------------------------------------
    # PaymentGateway
    # -------------------------------------------------------------------
    def create_checkout_session(
        self,
        line_items: list[LineItem],
        currency: str,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "line_items": list(line_items),
                "currency": currency,
                "metadata": dict(metadata),
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )

        if not self.should_succeed:
            raise GatewayError(self.failure_reason)

        session_id = f"cs_fake_{uuid4().hex[:16]}"
        self.sessions[session_id] = {
            "metadata": dict(metadata),
            "amount_total": sum(item.total for item in line_items),
            "currency": currency,
            "payment_intent": None,
        }
        return CheckoutSession(
            session_id=session_id,
            url=f"https://checkout.fake.test/pay/{session_id}",
            metadata=dict(metadata),
        )

    def construct_event(self, payload: bytes, signature: str | None) -> GatewayEvent:
        self.calls.append({"method": "construct_event"})
        self._verify(payload, signature)

        try:
            event = json.loads(payload)
        except ValueError as exc:
            raise SignatureVerificationError("Webhook payload is not valid JSON") from exc

        obj = event.get("data", {}).get("object", {})
        return to_gateway_event(event.get("type", ""), obj.get("id"))

    def find_session_metadata(self, transaction_id: str) -> dict | None:
        self.calls.append({"method": "find_session_metadata", "transaction_id": transaction_id})
        if not transaction_id:
            return None
        for session in self.sessions.values():
            if session["payment_intent"] == transaction_id:
                return dict(session["metadata"])
        return None

    # -------------------------------------------------------------------
    # Test helpers
    # -------------------------------------------------------------------
    def complete_session(self, session_id: str) -> str:
        """Simulate the buyer paying on the hosted page; returns the transaction id."""
        transaction_id = f"pi_fake_{uuid4().hex[:16]}"
        self.sessions[session_id]["payment_intent"] = transaction_id
        return transaction_id

    def sign(self, payload: bytes, timestamp: int | None = None) -> str:
        timestamp = int(time.time()) if timestamp is None else timestamp
        digest = self._digest(timestamp, payload)
        return f"t={timestamp},v1={digest}"

    def signed_event(self, event_type: str, transaction_id: str) -> tuple[bytes, str]:
        payload = json.dumps(
            {
                "id": f"evt_fake_{uuid4().hex[:16]}",
                "type": event_type,
                "data": {"object": {"id": transaction_id}},
            }
        ).encode()
        return payload, self.sign(payload)

    def succeed(self, session_id: str) -> tuple[bytes, str]:
        return self.signed_event(PAYMENT_SUCCEEDED, self.complete_session(session_id))

    def fail(self, session_id: str) -> tuple[bytes, str]:
        return self.signed_event(PAYMENT_FAILED, self.complete_session(session_id))

    # -------------------------------------------------------------------
    # Signature checks
    # -------------------------------------------------------------------
    def _digest(self, timestamp: int, payload: bytes) -> str:
        signed = f"{timestamp}.".encode() + payload
        return hmac.new(self.webhook_secret.encode(), signed, hashlib.sha256).hexdigest()

    def _verify(self, payload: bytes, signature: str | None) -> None:
        if not signature:
            raise SignatureVerificationError("Missing webhook signature")
        try:
            stripe.WebhookSignature.verify_header(
                payload.decode("utf-8"),
                signature,
                self.webhook_secret,
                tolerance=SIGNATURE_TOLERANCE,
            )
        except stripe.SignatureVerificationError as exc:
            raise SignatureVerificationError(str(exc)) from exc
        except UnicodeDecodeError as exc:
            raise SignatureVerificationError("Webhook payload is not valid UTF-8") from exc
