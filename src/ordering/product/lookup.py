"""Catalogue reads used when pricing an order."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.order.errors import InvalidReference
from ordering.product.product import Product


@dataclass(frozen=True)
class ProductPrice:
    product_id: str
    name: str
    category: str
    unit_price: int


def price_of(product_id) -> ProductPrice:
    """Return the current selling price of a product.

    Reads the repository on every call; callers that price several lines get
    one lookup per line.
    """
    try:
        product = current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise InvalidReference(product_id) from None

    return ProductPrice(
        product_id=str(product.id),
        name=product.name,
        category=product.category,
        unit_price=product.offer_price,
    )


def list_products():
    """Return every product in the catalogue, newest first."""
    repo = current_domain.repository_for(Product)
    return repo._dao.query.order_by("-created_at").all().items


def get_product(product_id):
    return current_domain.repository_for(Product).get(product_id)
