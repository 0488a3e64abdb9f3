"""Shopping Cart aggregate (CQRS): the buyer's saved cart contents.

One cart per buyer, keyed by the buyer's id. The contents are a mapping of
product id to quantity, replaced wholesale on every update. A paid online
order clears the cart; a cash order leaves clearing to the client.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Text

from ordering.cart.events import CartCleared, CartUpdated
from ordering.domain import ordering


def _validated(items) -> dict[str, int]:
    contents = {}
    for product_id, quantity in (items or {}).items():
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 0:
            raise ValidationError({"items": [f"Invalid quantity for product {product_id}"]})
        if quantity > 0:
            contents[str(product_id)] = quantity
    return contents


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier(identifier=True)
    items = Text(default="{}")  # JSON: {product_id: quantity}
    updated_at = DateTime()

    @classmethod
    def for_customer(cls, customer_id):
        return cls(customer_id=customer_id, items=json.dumps({}), updated_at=datetime.now(UTC))

    def contents(self) -> dict[str, int]:
        return json.loads(self.items) if self.items else {}

    def replace_items(self, items):
        """Replace the cart contents. Zero quantities drop the product."""
        contents = _validated(items)
        self.items = json.dumps(contents)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartUpdated(
                customer_id=str(self.customer_id),
                items=self.items,
                item_count=sum(contents.values()),
            )
        )

    def clear(self):
        if not self.contents():
            return
        self.items = json.dumps({})
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(customer_id=str(self.customer_id), cleared_at=self.updated_at))
