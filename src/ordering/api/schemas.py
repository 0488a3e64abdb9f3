"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands. Address fields are all optional here; the domain
decides what a usable shipping address is.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from shared.responses import Envelope


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None
    phone: str | None = None


class OrderLineSchema(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    items: list[OrderLineSchema]
    address: AddressSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "prod-001", "quantity": 2}],
                    "address": {
                        "first_name": "Rahim",
                        "last_name": "Uddin",
                        "email": "rahim@example.com",
                        "street": "12 Lake Road",
                        "city": "Dhaka",
                        "state": "Dhaka",
                        "zipcode": "1207",
                        "country": "Bangladesh",
                        "phone": "+8801700000000",
                    },
                }
            ]
        }
    }


class MarkPaidRequest(BaseModel):
    order_id: str
    is_paid: bool


class UpdateStatusRequest(BaseModel):
    order_id: str
    status: str = Field(min_length=1, max_length=50)


# ---------------------------------------------------------------------------
# Order Response Schemas
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    category: str | None = None
    unit_price: int
    quantity: int


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    items: list[OrderItemResponse]
    address: AddressSchema | None = None
    subtotal: int
    tax: int
    amount: int
    payment_type: Literal["COD", "Online"]
    is_paid: bool
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderPlacedResponse(Envelope):
    message: str = "Order Placed"
    order_id: str


class CheckoutResponse(Envelope):
    message: str = "Checkout session created"
    order_id: str
    url: str


class OrderListResponse(Envelope):
    orders: list[OrderResponse]


class WebhookResponse(Envelope):
    received: bool = True
    outcome: Literal["paid", "discarded", "ignored"]


class InvoiceLineResponse(BaseModel):
    name: str
    quantity: int
    unit_price: int
    total: int


class InvoiceResponse(Envelope):
    number: str
    order_id: str
    issued_on: date | None = None
    is_paid: bool
    payment_type: str
    status: str
    address: AddressSchema | None = None
    lines: list[InvoiceLineResponse]
    subtotal: int
    tax: int
    total: int


class CategorySalesResponse(BaseModel):
    name: str
    units: int
    revenue: int


class MonthlySalesResponse(BaseModel):
    year: int
    month: str
    orders: int
    revenue: int


class StatisticsResponse(Envelope):
    total_orders: int
    total_revenue: int
    total_products: int
    total_customers: int
    paid_orders: int
    pending_orders: int
    cod_orders: int
    online_orders: int
    categories: list[CategorySalesResponse]
    monthly: list[MonthlySalesResponse]
    recent_orders: list[OrderResponse]


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class UpdateCartRequest(BaseModel):
    items: dict[str, int]


class CartResponse(Envelope):
    items: dict[str, int]


# ---------------------------------------------------------------------------
# Product Schemas
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str = Field(min_length=1, max_length=100)
    price: int = Field(ge=1)
    offer_price: int = Field(ge=1)
    in_stock: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Organic Bananas",
                    "description": "One dozen, ripe",
                    "category": "Fruits",
                    "price": 120,
                    "offer_price": 100,
                    "in_stock": True,
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str = Field(min_length=1, max_length=100)
    price: int = Field(ge=1)
    offer_price: int = Field(ge=1)


class ChangeStockRequest(BaseModel):
    in_stock: bool


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    category: str
    price: int
    offer_price: int
    in_stock: bool
    created_at: datetime | None = None


class ProductEnvelope(Envelope):
    product: ProductResponse


class ProductListResponse(Envelope):
    products: list[ProductResponse]


class ProductIdResponse(Envelope):
    product_id: str
