"""Invoice data for a single order.

Figures come straight from the order: the invoice never re-prices lines or
recomputes tax, so its total always matches what was charged.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class InvoiceLine:
    name: str
    quantity: int
    unit_price: int
    total: int


@dataclass(frozen=True)
class Invoice:
    number: str
    order_id: str
    issued_on: date | None
    is_paid: bool
    payment_type: str
    status: str
    address: dict
    lines: list[InvoiceLine]
    subtotal: int
    tax: int
    total: int


def invoice_number(order_id) -> str:
    return f"INV-{str(order_id)[-8:].upper()}"


def invoice_for(order) -> Invoice:
    address = order.shipping_address.to_dict() if order.shipping_address else {}
    return Invoice(
        number=invoice_number(order.id),
        order_id=str(order.id),
        issued_on=order.created_at.date() if order.created_at else None,
        is_paid=bool(order.is_paid),
        payment_type=order.payment_type,
        status=order.status,
        address=address,
        lines=[
            InvoiceLine(
                name=item.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total=item.line_total,
            )
            for item in order.ordered_items()
        ],
        subtotal=order.subtotal,
        tax=order.tax,
        total=order.amount,
    )
