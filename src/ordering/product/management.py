"""Catalogue management: commands and handler for seller product edits."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.product.product import Product


@ordering.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(required=True, max_length=100)
    price = Integer(required=True, min_value=1)
    offer_price = Integer(required=True, min_value=1)
    in_stock = Boolean(default=True)


@ordering.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    category = String(required=True, max_length=100)
    price = Integer(required=True, min_value=1)
    offer_price = Integer(required=True, min_value=1)


@ordering.command(part_of="Product")
class ChangeStock:
    product_id = Identifier(required=True)
    in_stock = Boolean(required=True)


@ordering.command(part_of="Product")
class RemoveProduct:
    product_id = Identifier(required=True)


@ordering.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            category=command.category,
            price=command.price,
            offer_price=command.offer_price,
            description=command.description,
            in_stock=command.in_stock if command.in_stock is not None else True,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), category=product.category)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            category=command.category,
            price=command.price,
            offer_price=command.offer_price,
            description=command.description,
        )
        repo.add(product)

    @handle(ChangeStock)
    def change_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_stock(command.in_stock)
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_removed", product_id=str(command.product_id))
