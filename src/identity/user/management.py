"""Deleting and promoting user accounts."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.user.user import User, UserRole
from ordering.cart.cart import Cart
from ordering.order.order import Order
from shared.domain import crm

logger = structlog.get_logger(__name__)


@crm.command(part_of="User")
class DeleteUser:
    """Remove a user together with their cart and orders."""

    user_id = Identifier(required=True)


@crm.command(part_of="User")
class PromoteToAdmin:
    """Grant the admin role to the user registered under ``email``."""

    email = String(required=True, max_length=254)


@crm.command_handler(part_of=User)
class ManageUserHandler:
    @handle(DeleteUser)
    def delete_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get_user(command.user_id)

        carts = current_domain.repository_for(Cart)
        cart = carts.find_by_user(user.id)
        if cart is not None:
            carts.remove_cart(cart)

        orders = current_domain.repository_for(Order)
        for order in orders.list_for_customer(user.id):
            orders.remove_order(order)

        repo.remove_user(user)

        logger.info("user_deleted", user_id=str(user.id), email=user.email)
        return str(user.id)

    @handle(PromoteToAdmin)
    def promote_to_admin(self, command):
        if not (command.email or "").strip():
            raise ValidationError({"email": ["Email must not be empty"]})

        repo = current_domain.repository_for(User)
        user = repo.get_by_email(command.email)
        user.update_role(UserRole.ADMIN)
        repo.add(user)

        logger.info("user_promoted", user_id=str(user.id), email=user.email)
        return str(user.id)
