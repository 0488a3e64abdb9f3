"""Domain events for the Product aggregate."""

from protean.fields import Boolean, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductAdded:
    """A new product was listed in the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    price = Integer(required=True)
    offer_price = Integer(required=True)


@ordering.event(part_of="Product")
class ProductUpdated:
    """Product details or prices were edited by the seller."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    price = Integer(required=True)
    offer_price = Integer(required=True)


@ordering.event(part_of="Product")
class StockChanged:
    __version__ = 1

    product_id = Identifier(required=True)
    in_stock = Boolean(required=True)
