"""Repository for the Cart aggregate."""

from protean.utils.globals import current_domain

from ordering.cart.cart import Cart, CartItem
from shared.domain import crm
from shared.exceptions import not_found


@crm.repository(part_of=Cart)
class CartRepository:
    def find_by_user(self, user_id) -> Cart | None:
        carts = self._dao.query.filter(user_id=str(user_id)).all().items
        return carts[0] if carts else None

    def get_by_user(self, user_id) -> Cart:
        cart = self.find_by_user(user_id)
        if cart is None:
            raise not_found(f"Cart for user {user_id} not found")
        return cart

    def get_or_create(self, user_id) -> Cart:
        return self.find_by_user(user_id) or Cart.create(user_id)

    def remove_cart(self, cart: Cart) -> None:
        """Delete the cart and its lines."""
        items = current_domain.repository_for(CartItem)._dao
        for item in list(cart.items):
            items.delete(item)
        self._dao.delete(cart)
