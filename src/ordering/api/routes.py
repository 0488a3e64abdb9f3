"""FastAPI routes for the Ordering domain: products, carts and orders.

Thin adapters that translate HTTP requests into domain commands and queries.
Caller identity arrives through the ``shared.identity`` dependencies and is
passed into every command explicitly.
"""

import json

from fastapi import APIRouter, Depends, Header, Request
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddProductRequest,
    AddressSchema,
    CartResponse,
    ChangeStockRequest,
    CheckoutResponse,
    InvoiceResponse,
    MarkPaidRequest,
    OrderItemResponse,
    OrderListResponse,
    OrderPlacedResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductEnvelope,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    StatisticsResponse,
    UpdateCartRequest,
    UpdateProductRequest,
    UpdateStatusRequest,
    WebhookResponse,
)
from ordering.cart.management import UpdateCart, cart_contents
from ordering.checkout.online import start_checkout
from ordering.order.administration import SetPaymentStatus, UpdateOrderStatus
from ordering.order.history import all_settled_orders, get_order, orders_for_customer
from ordering.order.order import PaymentType
from ordering.order.placement import PlaceOrder
from ordering.order.reconciliation import reconcile
from ordering.product.lookup import get_product, list_products
from ordering.product.management import AddProduct, ChangeStock, RemoveProduct, UpdateProduct
from ordering.reporting.invoice import invoice_for
from ordering.reporting.statistics import dashboard_statistics
from payments.gateway import get_gateway
from shared.identity import buyer_id, seller
from shared.responses import Envelope

RECENT_ORDERS_SHOWN = 5


def _order_response(order) -> OrderResponse:
    address = order.shipping_address.to_dict() if order.shipping_address else None
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                name=item.name,
                category=item.category,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for item in order.ordered_items()
        ],
        address=address,
        subtotal=order.subtotal,
        tax=order.tax,
        amount=order.amount,
        payment_type=order.payment_type,
        is_paid=bool(order.is_paid),
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        category=product.category,
        price=product.price,
        offer_price=product.offer_price,
        in_stock=bool(product.in_stock),
        created_at=product.created_at,
    )


def _place(customer_id: str, body: PlaceOrderRequest, payment_type: PaymentType) -> str:
    address = body.address.model_dump(exclude_none=True) if body.address else {}
    command = PlaceOrder(
        customer_id=customer_id,
        items=json.dumps([line.model_dump() for line in body.items]),
        shipping_address=json.dumps(address) if address else None,
        payment_type=payment_type.value,
    )
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("/cod", status_code=201, response_model=OrderPlacedResponse)
async def place_cod_order(body: PlaceOrderRequest, customer_id: str = Depends(buyer_id)) -> OrderPlacedResponse:
    order_id = _place(customer_id, body, PaymentType.COD)
    return OrderPlacedResponse(order_id=order_id)


@order_router.post("/online", status_code=201, response_model=CheckoutResponse)
async def place_online_order(
    body: PlaceOrderRequest,
    request: Request,
    customer_id: str = Depends(buyer_id),
    origin: str | None = Header(default=None),
) -> CheckoutResponse:
    """Place an online order and return the hosted checkout URL.

    The order is written before the gateway is called. If the gateway fails
    the response is a 502 carrying the order id, and the order stays unpaid.
    """
    order_id = _place(customer_id, body, PaymentType.ONLINE)
    checkout = start_checkout(order_id, origin or str(request.base_url), get_gateway())
    return CheckoutResponse(order_id=order_id, url=checkout.url)


@order_router.post("/webhook", response_model=WebhookResponse)
async def payment_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None),
) -> WebhookResponse:
    """Receive a payment gateway event.

    The raw body is verified before anything in it is read. Verified events
    are always acknowledged, including ones that match no order.
    """
    payload = await request.body()
    gateway = get_gateway()
    event = gateway.construct_event(payload, stripe_signature)
    outcome = reconcile(event, gateway)
    return WebhookResponse(message="Event received", outcome=outcome.value)


@order_router.get("/mine", response_model=OrderListResponse)
async def my_orders(customer_id: str = Depends(buyer_id)) -> OrderListResponse:
    return OrderListResponse(orders=[_order_response(o) for o in orders_for_customer(customer_id)])


@order_router.get("/all", response_model=OrderListResponse, dependencies=[Depends(seller)])
async def all_orders() -> OrderListResponse:
    return OrderListResponse(orders=[_order_response(o) for o in all_settled_orders()])


@order_router.post("/mark-paid", response_model=Envelope, dependencies=[Depends(seller)])
async def mark_paid(body: MarkPaidRequest) -> Envelope:
    command = SetPaymentStatus(order_id=body.order_id, is_paid=body.is_paid)
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Payment status updated")


@order_router.post("/status", response_model=Envelope, dependencies=[Depends(seller)])
async def update_status(body: UpdateStatusRequest) -> Envelope:
    command = UpdateOrderStatus(order_id=body.order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Order status updated")


@order_router.get("/stats", response_model=StatisticsResponse, dependencies=[Depends(seller)])
async def dashboard() -> StatisticsResponse:
    orders = all_settled_orders()
    stats = dashboard_statistics(orders, product_count=len(list_products()))
    return StatisticsResponse(
        total_orders=stats.total_orders,
        total_revenue=stats.total_revenue,
        total_products=stats.total_products,
        total_customers=stats.total_customers,
        paid_orders=stats.paid_orders,
        pending_orders=stats.pending_orders,
        cod_orders=stats.cod_orders,
        online_orders=stats.online_orders,
        categories=[vars(c) for c in stats.categories],
        monthly=[vars(m) for m in stats.monthly],
        recent_orders=[_order_response(o) for o in orders[:RECENT_ORDERS_SHOWN]],
    )


@order_router.get("/{order_id}/invoice", response_model=InvoiceResponse)
async def order_invoice(order_id: str, customer_id: str = Depends(buyer_id)) -> InvoiceResponse:
    """Invoice data for one of the caller's own visible orders."""
    order = get_order(order_id)
    if str(order.customer_id) != customer_id or not order.is_settled:
        raise ObjectNotFoundError(f"Order {order_id} not found")

    invoice = invoice_for(order)
    return InvoiceResponse(
        number=invoice.number,
        order_id=invoice.order_id,
        issued_on=invoice.issued_on,
        is_paid=invoice.is_paid,
        payment_type=invoice.payment_type,
        status=invoice.status,
        address=AddressSchema(**invoice.address) if invoice.address else None,
        lines=[vars(line) for line in invoice.lines],
        subtotal=invoice.subtotal,
        tax=invoice.tax,
        total=invoice.total,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(customer_id: str = Depends(buyer_id)) -> CartResponse:
    return CartResponse(items=cart_contents(customer_id))


@cart_router.put("", response_model=CartResponse)
async def update_cart(body: UpdateCartRequest, customer_id: str = Depends(buyer_id)) -> CartResponse:
    command = UpdateCart(customer_id=customer_id, items=json.dumps(body.items))
    items = current_domain.process(command, asynchronous=False)
    return CartResponse(message="Cart updated", items=items)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
async def products() -> ProductListResponse:
    return ProductListResponse(products=[_product_response(p) for p in list_products()])


@product_router.get("/{product_id}", response_model=ProductEnvelope)
async def product_detail(product_id: str) -> ProductEnvelope:
    return ProductEnvelope(product=_product_response(get_product(product_id)))


@product_router.post("", status_code=201, response_model=ProductIdResponse, dependencies=[Depends(seller)])
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        category=body.category,
        price=body.price,
        offer_price=body.offer_price,
        in_stock=body.in_stock,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(message="Product Added", product_id=product_id)


@product_router.put("/{product_id}", response_model=Envelope, dependencies=[Depends(seller)])
async def update_product(product_id: str, body: UpdateProductRequest) -> Envelope:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        category=body.category,
        price=body.price,
        offer_price=body.offer_price,
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Product Updated")


@product_router.put("/{product_id}/stock", response_model=Envelope, dependencies=[Depends(seller)])
async def change_stock(product_id: str, body: ChangeStockRequest) -> Envelope:
    current_domain.process(ChangeStock(product_id=product_id, in_stock=body.in_stock), asynchronous=False)
    return Envelope(message="Stock Updated")


@product_router.delete("/{product_id}", response_model=Envelope, dependencies=[Depends(seller)])
async def remove_product(product_id: str) -> Envelope:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return Envelope(message="Product Removed")
