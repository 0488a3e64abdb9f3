import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api.routes import cart_router, order_router, product_router

from shared.errors import register_error_handlers

SELLER_HEADERS = {"X-Seller-Key": "test-seller-key"}


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(order_router)
    app.include_router(cart_router)
    app.include_router(product_router)
    return TestClient(app)


@pytest.fixture()
def seller_headers():
    return dict(SELLER_HEADERS)


@pytest.fixture()
def product(client, seller_headers):
    """A catalogue product created through the API: (product_id, offer_price)."""
    response = client.post(
        "/products",
        json={"name": "Basmati Rice", "category": "Grains", "price": 120, "offer_price": 100},
        headers=seller_headers,
    )
    assert response.status_code == 201
    return response.json()["product_id"]
