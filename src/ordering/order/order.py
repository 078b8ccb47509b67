"""Order aggregate.

An order belongs to a customer (a registered user) and holds one line per
product. The total amount always equals the sum of the line totals.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from catalogue.product.product import MAX_QUANTITY, to_money
from shared.domain import crm

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
DEFAULT_DESCRIPTION = "There was no description provided"


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSED = "Processed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


@crm.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1, max_value=MAX_QUANTITY)
    unit_price = Float(required=True, min_value=0.01)

    @property
    def line_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)


@crm.aggregate
class Order:
    order_guid = String(required=True, max_length=36)
    customer_id = Identifier(required=True)
    username = String(required=True, max_length=USERNAME_MAX_LENGTH)
    description = String(max_length=DESCRIPTION_MAX_LENGTH, default=DEFAULT_DESCRIPTION)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    order_date = DateTime()
    total_amount = Float(default=0.0)
    items = HasMany(OrderItem)

    @invariant.post
    def username_must_be_within_bounds(self):
        if not USERNAME_MIN_LENGTH <= len((self.username or "").strip()) <= USERNAME_MAX_LENGTH:
            raise ValidationError(
                {
                    "username": [
                        f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
                    ]
                }
            )

    @classmethod
    def create(cls, username, customer_id, description=None):
        description = (description or "").strip() or DEFAULT_DESCRIPTION
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError({"description": [f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"]})

        return cls(
            order_guid=str(uuid4()),
            username=username.strip() if isinstance(username, str) else username,
            customer_id=str(customer_id),
            description=description,
            status=OrderStatus.PENDING.value,
            order_date=datetime.now(UTC),
            total_amount=0.0,
        )

    def add_item(self, product_id, product_name, quantity, unit_price):
        """Append a line and recompute the total."""
        item = OrderItem(
            product_id=str(product_id),
            product_name=product_name,
            quantity=quantity,
            unit_price=to_money(unit_price, field="unit_price"),
        )
        self.add_items(item)
        self.total_amount = self.calculate_total()
        return item

    def calculate_total(self) -> float:
        return round(sum(item.line_total for item in self.items), 2)
