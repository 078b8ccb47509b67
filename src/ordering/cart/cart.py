"""Shopping cart aggregate.

Every user has at most one cart. Lines keep the product name and unit price
captured when the product was first added.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from catalogue.product.product import MAX_QUANTITY, to_money
from shared.domain import crm
from shared.exceptions import InsufficientStockError, not_found


@crm.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1, max_value=MAX_QUANTITY)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def item_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)


@crm.aggregate
class Cart:
    """A user's shopping cart.

    Adding a product that is already in the cart raises the quantity of the
    existing line instead of creating a second one.
    """

    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=str(user_id), created_at=now, updated_at=now)

    def _touch(self):
        self.updated_at = datetime.now(UTC)

    def find_item(self, product_id) -> CartItem | None:
        return next((item for item in self.items if str(item.product_id) == str(product_id)), None)

    def add_item(self, product_id, product_name, unit_price, quantity, available_stock=None):
        """Add ``quantity`` of a product, merging into an existing line.

        When ``available_stock`` is given, the resulting line quantity may not exceed it.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self.find_item(product_id)
        new_quantity = quantity + (item.quantity if item else 0)
        if available_stock is not None and new_quantity > available_stock:
            raise InsufficientStockError(product_name, new_quantity, available_stock)

        if item:
            item.quantity = new_quantity
        else:
            item = CartItem(
                product_id=str(product_id),
                product_name=product_name,
                quantity=quantity,
                unit_price=to_money(unit_price, field="unit_price"),
            )
            self.add_items(item)

        self._touch()
        return item

    def update_item_quantity(self, product_id, quantity, available_stock=None):
        """Set a line's quantity; zero or less removes the line."""
        item = self.find_item(product_id)
        if item is None:
            raise not_found(f"Product {product_id} is not in the cart")

        if quantity <= 0:
            self.remove_items(item)
            self._touch()
            return None

        if available_stock is not None and quantity > available_stock:
            raise InsufficientStockError(item.product_name, quantity, available_stock)

        item.quantity = quantity
        self._touch()
        return item

    def remove_item(self, product_id):
        item = self.find_item(product_id)
        if item is None:
            raise not_found(f"Product {product_id} is not in the cart")
        self.remove_items(item)
        self._touch()

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self._touch()

    @property
    def total(self) -> float:
        return round(sum(item.item_total for item in self.items), 2)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
