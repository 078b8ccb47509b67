"""Order placement: command and handler.

The order header, its lines and the stock decrements of every product are
written in one unit of work; any failure leaves the stores untouched.
"""

import json
from collections import Counter

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.product.product import MAX_QUANTITY, Product
from identity.user.user import User
from ordering.order.order import DESCRIPTION_MAX_LENGTH, Order
from shared.domain import crm
from shared.exceptions import InsufficientStockError, not_found

logger = structlog.get_logger(__name__)


@crm.command(part_of="Order")
class PlaceOrder:
    username = String(max_length=100, default="")
    customer_id = Identifier()
    description = String(max_length=DESCRIPTION_MAX_LENGTH)
    items = Text()  # JSON: list of {"product_id", "quantity"}


def _order_lines(items) -> list[tuple[str, int]]:
    lines = json.loads(items) if isinstance(items, str) else (items or [])
    parsed = []
    for line in lines:
        product_id = str(line.get("product_id") or "").strip()
        quantity = line.get("quantity")
        if not product_id:
            raise ValidationError({"product_id": ["Product ID is required for every item"]})
        if isinstance(quantity, bool) or not isinstance(quantity, int) or not 1 <= quantity <= MAX_QUANTITY:
            raise ValidationError({"quantity": [f"Quantity must be between 1 and {MAX_QUANTITY}"]})
        parsed.append((product_id, quantity))
    return parsed


def _requested_quantities(lines: list[tuple[str, int]]) -> Counter:
    """Total quantity per product, in first-seen order."""
    quantities = Counter()
    for product_id, quantity in lines:
        quantities[product_id] += quantity
    return quantities


@crm.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = _order_lines(command.items)
        if not (command.username or "").strip() or not command.customer_id or not lines:
            raise ValidationError(
                {"order": ["Order must contain a valid username, customer ID, and at least one item"]}
            )

        customer = current_domain.repository_for(User).find_user(command.customer_id)
        if customer is None:
            logger.warning("order_customer_not_found", customer_id=str(command.customer_id))
            raise not_found(f"Customer with ID {command.customer_id} not found")

        quantities = _requested_quantities(lines)
        product_repo = current_domain.repository_for(Product)
        products = product_repo.get_many(quantities)

        for product_id, quantity in quantities.items():
            product = products[product_id]
            if not product.has_stock(quantity):
                logger.warning(
                    "order_insufficient_stock",
                    product_id=product_id,
                    requested=quantity,
                    available=product.stock_quantity,
                )
                raise InsufficientStockError(product.name, quantity, product.stock_quantity)

        order = Order.create(
            username=command.username,
            customer_id=customer.id,
            description=command.description,
        )
        for product_id, quantity in quantities.items():
            product = products[product_id]
            order.add_item(
                product_id=product.id,
                product_name=product.name,
                quantity=quantity,
                unit_price=product.price,
            )
            product.remove_stock(quantity)
            product_repo.add(product)

        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_guid=order.order_guid,
            customer_id=str(order.customer_id),
            total_amount=order.total_amount,
            item_count=len(order.items),
        )
        return order.order_guid
