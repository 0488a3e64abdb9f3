"""Application tests for reconciling gateway events against the order ledger."""

import json

import pytest
from ordering.cart.management import UpdateCart, cart_contents
from ordering.checkout.online import start_checkout
from ordering.order.administration import SetPaymentStatus
from ordering.order.history import all_settled_orders, get_order, orders_for_customer
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.reconciliation import (
    ConfirmOnlinePayment,
    DiscardUnpaidOrder,
    ReconciliationOutcome,
    reconcile,
)
from payments.gateway.port import PaymentFailed, PaymentSucceeded, UnhandledEvent
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

BUYER = "buyer-reconcile-001"


def _place(add_product, address, payment_type="Online"):
    product = add_product(price=100, offer_price=100)
    return current_domain.process(
        PlaceOrder(
            customer_id=BUYER,
            items=json.dumps([{"product_id": product, "quantity": 2}]),
            shipping_address=json.dumps(address),
            payment_type=payment_type,
        ),
        asynchronous=False,
    )


@pytest.fixture()
def checkout(gateway, add_product, address):
    """An online order with an open checkout session: (order_id, session_id)."""
    order_id = _place(add_product, address)
    started = start_checkout(order_id, "https://shop.example", gateway)
    return order_id, started.session_id


class TestPaymentSucceeded:
    def test_marks_order_paid(self, gateway, checkout):
        order_id, session_id = checkout
        transaction_id = gateway.complete_session(session_id)

        outcome = reconcile(PaymentSucceeded(transaction_id=transaction_id), gateway)

        assert outcome is ReconciliationOutcome.PAID
        assert get_order(order_id).is_paid is True

    def test_paid_order_becomes_visible(self, gateway, checkout):
        order_id, session_id = checkout
        assert order_id not in [str(o.id) for o in orders_for_customer(BUYER)]

        reconcile(PaymentSucceeded(transaction_id=gateway.complete_session(session_id)), gateway)

        assert order_id in [str(o.id) for o in orders_for_customer(BUYER)]
        assert order_id in [str(o.id) for o in all_settled_orders()]

    def test_replayed_event_leaves_order_paid(self, gateway, checkout):
        order_id, session_id = checkout
        event = PaymentSucceeded(transaction_id=gateway.complete_session(session_id))

        reconcile(event, gateway)
        outcome = reconcile(event, gateway)

        assert outcome is ReconciliationOutcome.PAID
        assert get_order(order_id).is_paid is True

    def test_clears_buyer_cart(self, gateway, checkout):
        _, session_id = checkout
        current_domain.process(UpdateCart(customer_id=BUYER, items=json.dumps({"p-1": 2})), asynchronous=False)

        reconcile(PaymentSucceeded(transaction_id=gateway.complete_session(session_id)), gateway)

        assert cart_contents(BUYER) == {}


class TestPaymentFailed:
    def test_deletes_unpaid_order(self, gateway, checkout):
        order_id, session_id = checkout

        outcome = reconcile(PaymentFailed(transaction_id=gateway.complete_session(session_id)), gateway)

        assert outcome is ReconciliationOutcome.DISCARDED
        with pytest.raises(ObjectNotFoundError):
            get_order(order_id)
        assert order_id not in [str(o.id) for o in all_settled_orders()]

    def test_replayed_failure_is_ignored(self, gateway, checkout):
        _, session_id = checkout
        event = PaymentFailed(transaction_id=gateway.complete_session(session_id))

        reconcile(event, gateway)
        assert reconcile(event, gateway) is ReconciliationOutcome.IGNORED

    def test_failure_after_payment_keeps_order(self, gateway, checkout):
        order_id, session_id = checkout
        transaction_id = gateway.complete_session(session_id)
        reconcile(PaymentSucceeded(transaction_id=transaction_id), gateway)

        outcome = reconcile(PaymentFailed(transaction_id=transaction_id), gateway)

        assert outcome is ReconciliationOutcome.IGNORED
        assert get_order(order_id).is_paid is True


class TestLookupMisses:
    def test_unknown_transaction_is_noop(self, gateway, checkout):
        order_id, _ = checkout

        outcome = reconcile(PaymentSucceeded(transaction_id="pi_unknown"), gateway)

        assert outcome is ReconciliationOutcome.IGNORED
        assert get_order(order_id).is_paid is False

    @pytest.mark.parametrize("event", [PaymentSucceeded(transaction_id=None), PaymentFailed(transaction_id="")])
    def test_event_without_transaction_is_noop(self, gateway, checkout, event):
        order_id, _ = checkout

        assert reconcile(event, gateway) is ReconciliationOutcome.IGNORED
        assert get_order(order_id).is_paid is False
        assert not [c for c in gateway.calls if c["method"] == "find_session_metadata"]

    def test_unhandled_event_type_is_noop(self, gateway, checkout):
        order_id, _ = checkout
        assert reconcile(UnhandledEvent(event_type="charge.refunded"), gateway) is ReconciliationOutcome.IGNORED
        assert get_order(order_id).is_paid is False

    def test_confirm_for_missing_order_is_noop(self):
        outcome = current_domain.process(
            ConfirmOnlinePayment(order_id="missing-order", customer_id=BUYER, transaction_id="pi_x"),
            asynchronous=False,
        )
        assert outcome is ReconciliationOutcome.IGNORED

    def test_discard_never_deletes_cod_order(self, add_product, address):
        order_id = _place(add_product, address, payment_type="COD")

        outcome = current_domain.process(
            DiscardUnpaidOrder(order_id=order_id, transaction_id="pi_x"),
            asynchronous=False,
        )

        assert outcome is ReconciliationOutcome.IGNORED
        assert current_domain.repository_for(Order).get(order_id) is not None


class TestOperatorOverride:
    def test_override_marks_cod_order_paid(self, add_product, address):
        order_id = _place(add_product, address, payment_type="COD")
        current_domain.process(SetPaymentStatus(order_id=order_id, is_paid=True), asynchronous=False)
        assert get_order(order_id).is_paid is True

    def test_override_on_missing_order_raises(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(SetPaymentStatus(order_id="missing-order", is_paid=True), asynchronous=False)
