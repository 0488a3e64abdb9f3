"""Shared BDD fixtures and step definitions for the Ordering domain."""

import json

import pytest
from ordering.order.history import orders_for_customer
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.product.management import AddProduct
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then


@pytest.fixture()
def context():
    return {"products": {}, "lines": [], "customer_id": None, "order_id": None, "error": None}


@pytest.fixture()
def bdd_address():
    return {"first_name": "Rahim", "street": "12 Lake Road", "city": "Dhaka", "country": "Bangladesh"}


@pytest.fixture()
def place_order(context, bdd_address):
    """Place the order collected in the context; rejections land in ``context["error"]``."""

    def _place(payment_type):
        try:
            context["order_id"] = current_domain.process(
                PlaceOrder(
                    customer_id=context["customer_id"],
                    items=json.dumps(context["lines"]),
                    shipping_address=json.dumps(bdd_address),
                    payment_type=payment_type,
                ),
                asynchronous=False,
            )
        except ValidationError as exc:
            context["error"] = exc

    return _place


@pytest.fixture()
def stored_order(context):
    def _load():
        return current_domain.repository_for(Order).get(context["order_id"])

    return _load


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue has "{name}" at {price:d}'))
def _(context, name, price):
    context["products"][name] = current_domain.process(
        AddProduct(name=name, category="Groceries", price=price, offer_price=price),
        asynchronous=False,
    )


@given(parsers.cfparse('buyer "{customer_id}" adds {quantity:d} "{name}" to the order'))
def _(context, customer_id, quantity, name):
    context["customer_id"] = customer_id
    context["lines"].append({"product_id": context["products"][name], "quantity": quantity})


@given(parsers.cfparse('buyer "{customer_id}" has nothing in the order'))
def _(context, customer_id):
    context["customer_id"] = customer_id
    context["lines"] = []


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the order is listed for the buyer")
def _(context):
    assert context["order_id"] in [str(o.id) for o in orders_for_customer(context["customer_id"])]


@then("the order is not listed for the buyer")
def _(context):
    assert context["order_id"] not in [str(o.id) for o in orders_for_customer(context["customer_id"])]


@then("the order is paid")
def _(stored_order):
    assert stored_order().is_paid is True


@then("the order is not paid")
def _(stored_order):
    assert stored_order().is_paid is False


@then("the order no longer exists")
def _(stored_order):
    with pytest.raises(ObjectNotFoundError):
        stored_order()
