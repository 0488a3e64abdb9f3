"""Validation failures raised while placing an order.

All three are raised before anything is written, so a rejected placement
leaves the ledger untouched.
"""

from protean.exceptions import ValidationError


class EmptyOrder(ValidationError):
    def __init__(self):
        super().__init__({"items": ["An order must contain at least one item"]})


class InvalidAddress(ValidationError):
    def __init__(self, reason="A shipping address is required"):
        super().__init__({"address": [reason]})


class InvalidReference(ValidationError):
    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__({"items": [f"Product {product_id} does not exist"]})
