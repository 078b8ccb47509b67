"""Product aggregate root."""

import math
from datetime import UTC, datetime
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String

from shared.domain import crm
from shared.exceptions import InsufficientStockError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 300
CATEGORY_MIN_LENGTH = 3
CATEGORY_MAX_LENGTH = 50

# Quantities are stored in 32-bit integer columns
MAX_QUANTITY = 2**31 - 1


def to_money(value, field="price") -> float:
    """Coerce ``value`` to a float rounded to cents, raising ``ValidationError`` for garbage."""
    if isinstance(value, bool):
        raise ValidationError({field: [f"Invalid amount {value!r}"]})
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError({field: [f"Invalid amount {value!r}"]}) from None
    if not math.isfinite(amount):
        raise ValidationError({field: [f"Invalid amount {value!r}"]})
    return round(amount, 2)


def _strip(value):
    return value.strip() if isinstance(value, str) else value


@crm.aggregate
class Product:
    """A sellable item with a price and an on-hand stock level.

    Each product gets a GUID on creation that never changes afterwards, even
    when its details are replaced. Stock only moves through ``add_stock`` and
    ``remove_stock`` and can never go negative.
    """

    product_guid: String(required=True, max_length=36)
    name: String(required=True, max_length=NAME_MAX_LENGTH)
    description: String(max_length=DESCRIPTION_MAX_LENGTH, default="")
    price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(required=True, min_value=0, max_value=MAX_QUANTITY)
    category: String(required=True, max_length=CATEGORY_MAX_LENGTH)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_be_within_bounds(self):
        if not NAME_MIN_LENGTH <= len((self.name or "").strip()) <= NAME_MAX_LENGTH:
            raise ValidationError(
                {"name": [f"Product name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"]}
            )

    @invariant.post
    def category_must_be_within_bounds(self):
        if not CATEGORY_MIN_LENGTH <= len((self.category or "").strip()) <= CATEGORY_MAX_LENGTH:
            raise ValidationError(
                {
                    "category": [
                        f"Category must be between {CATEGORY_MIN_LENGTH} and {CATEGORY_MAX_LENGTH} characters"
                    ]
                }
            )

    @classmethod
    def create(cls, name, description, price, stock_quantity, category):
        now = datetime.now(UTC)
        return cls(
            product_guid=str(uuid4()),
            name=_strip(name),
            description=_strip(description) or "",
            price=to_money(price),
            stock_quantity=stock_quantity,
            category=_strip(category),
            created_at=now,
            updated_at=now,
        )

    def _touch(self):
        self.updated_at = datetime.now(UTC)

    def update_details(self, name, description, price, stock_quantity, category):
        """Replace every editable field; the GUID is kept."""
        self.name = _strip(name)
        self.description = _strip(description) or ""
        self.price = to_money(price)
        self.stock_quantity = stock_quantity
        self.category = _strip(category)
        self._touch()

    def has_stock(self, quantity) -> bool:
        return self.stock_quantity >= quantity

    def add_stock(self, quantity):
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity to add must be positive"]})
        self.stock_quantity += quantity
        self._touch()

    def remove_stock(self, quantity):
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity to remove must be positive"]})
        if not self.has_stock(quantity):
            raise InsufficientStockError(self.name, quantity, self.stock_quantity)
        self.stock_quantity -= quantity
        self._touch()
