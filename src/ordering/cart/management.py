"""Cart management: lookup and clearing."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from identity.user.user import User
from ordering.cart.cart import Cart
from shared.domain import crm

logger = structlog.get_logger(__name__)


@crm.command(part_of="Cart")
class ClearCart:
    """Remove every line from a user's cart."""

    user_id = Identifier(required=True)


def get_cart(user_id) -> Cart | None:
    """Return the user's cart, or ``None`` when they have never added anything."""
    current_domain.repository_for(User).get_user(user_id)
    return current_domain.repository_for(Cart).find_by_user(user_id)


@crm.command_handler(part_of=Cart)
class ClearCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        current_domain.repository_for(User).get_user(command.user_id)
        repo = current_domain.repository_for(Cart)
        cart = repo.find_by_user(command.user_id)
        if cart is None:
            return None

        cart.clear()
        repo.add(cart)

        logger.info("cart_cleared", user_id=str(command.user_id))
        return str(cart.id)
