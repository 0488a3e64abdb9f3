"""Order pricing: subtotal, flat tax and amount due.

Money is an integer count of the currency's minor unit, so every figure here
is exact and the same inputs always produce the same amount.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ordering.order.errors import EmptyOrder
from ordering.product.lookup import ProductPrice

TAX_PERCENT = 10


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class PricedLine:
    product_id: str
    name: str
    category: str
    unit_price: int
    quantity: int

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class OrderPricing:
    lines: tuple[PricedLine, ...]
    subtotal: int
    tax: int
    amount: int


def compute_tax(subtotal: int) -> int:
    """Flat tax on the subtotal, rounded down to the minor unit."""
    return subtotal * TAX_PERCENT // 100


def price_order(lines: Iterable[OrderLine], price_of: Callable[[str], ProductPrice]) -> OrderPricing:
    """Price order lines against the catalogue as it is right now.

    Raises EmptyOrder when there are no lines, and lets InvalidReference from
    ``price_of`` propagate for an unknown product.
    """
    lines = list(lines)
    if not lines:
        raise EmptyOrder()

    priced = []
    for line in lines:
        product = price_of(line.product_id)
        priced.append(
            PricedLine(
                product_id=product.product_id,
                name=product.name,
                category=product.category,
                unit_price=product.unit_price,
                quantity=line.quantity,
            )
        )

    subtotal = sum(line.line_total for line in priced)
    tax = compute_tax(subtotal)
    return OrderPricing(lines=tuple(priced), subtotal=subtotal, tax=tax, amount=subtotal + tax)
