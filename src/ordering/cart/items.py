"""Cart item management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from catalogue.product.product import MAX_QUANTITY, Product
from identity.user.user import User
from ordering.cart.cart import Cart
from shared.domain import crm

logger = structlog.get_logger(__name__)


@crm.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(min_value=1, max_value=MAX_QUANTITY, default=1)


@crm.command(part_of="Cart")
class UpdateCartQuantity:
    """Set a line's quantity; zero or less removes the line."""

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=-MAX_QUANTITY, max_value=MAX_QUANTITY)


@crm.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@crm.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        current_domain.repository_for(User).get_user(command.user_id)
        product = current_domain.repository_for(Product).get_product(command.product_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        cart.add_item(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            quantity=command.quantity,
            available_stock=product.stock_quantity,
        )
        repo.add(cart)

        logger.info(
            "cart_item_added",
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_by_user(command.user_id)

        available_stock = None
        if command.quantity > 0:
            available_stock = current_domain.repository_for(Product).get_product(command.product_id).stock_quantity

        cart.update_item_quantity(command.product_id, command.quantity, available_stock=available_stock)
        repo.add(cart)

        logger.info(
            "cart_quantity_updated",
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_by_user(command.user_id)
        cart.remove_item(command.product_id)
        repo.add(cart)

        logger.info("cart_item_removed", user_id=str(command.user_id), product_id=str(command.product_id))
        return str(cart.id)
