"""Product aggregate: the catalogue record an order line is priced against.

Prices are integer amounts in the currency's minor unit. The offer price is
what a buyer pays; the list price is shown struck through next to it.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from ordering.domain import ordering
from ordering.product.events import ProductAdded, ProductUpdated, StockChanged


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(required=True, max_length=100)
    price = Integer(required=True, min_value=1)
    offer_price = Integer(required=True, min_value=1)
    in_stock = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def offer_price_cannot_exceed_price(self):
        if self.price is not None and self.offer_price is not None and self.offer_price > self.price:
            raise ValidationError({"offer_price": ["Offer price cannot be greater than the list price"]})

    @classmethod
    def add(cls, name, category, price, offer_price, description=None, in_stock=True):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            category=category,
            price=price,
            offer_price=offer_price,
            description=description,
            in_stock=in_stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                category=category,
                price=price,
                offer_price=offer_price,
            )
        )
        return product

    def update_details(self, name, category, price, offer_price, description=None):
        with atomic_change(self):
            self.name = name
            self.category = category
            self.price = price
            self.offer_price = offer_price
            self.description = description
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=name,
                category=category,
                price=price,
                offer_price=offer_price,
            )
        )

    def change_stock(self, in_stock):
        self.in_stock = in_stock
        self.updated_at = datetime.now(UTC)
        self.raise_(StockChanged(product_id=str(self.id), in_stock=in_stock))
