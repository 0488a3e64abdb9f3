"""Domain events for the ShoppingCart aggregate."""

from protean.fields import DateTime, Identifier, Integer, Text

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartUpdated:
    """The buyer saved new cart contents."""

    __version__ = 1

    customer_id = Identifier(required=True)
    items = Text(required=True)
    item_count = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """The cart was emptied after its order was paid."""

    __version__ = 1

    customer_id = Identifier(required=True)
    cleared_at = DateTime(required=True)
