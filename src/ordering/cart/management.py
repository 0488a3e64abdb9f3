"""Cart management: commands and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import logger, ordering


@ordering.command(part_of="ShoppingCart")
class UpdateCart:
    """Replace a buyer's cart contents, creating the cart on first use."""

    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: {product_id: quantity}


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


def find_cart(customer_id):
    try:
        return current_domain.repository_for(ShoppingCart).get(str(customer_id))
    except ObjectNotFoundError:
        return None


def cart_contents(customer_id) -> dict[str, int]:
    cart = find_cart(customer_id)
    return cart.contents() if cart else {}


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(UpdateCart)
    def update_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = find_cart(command.customer_id) or ShoppingCart.for_customer(command.customer_id)

        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        cart.replace_items(items)
        repo.add(cart)
        return cart.contents()

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = find_cart(command.customer_id)
        if cart is None:
            logger.debug("cart_clear_skipped", customer_id=str(command.customer_id))
            return
        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)
