"""Product creation: command and handler."""

import structlog
from protean import handle
from protean.fields import Float, Integer, String
from protean.utils.globals import current_domain

from catalogue.product.product import MAX_QUANTITY, Product
from shared.domain import crm

logger = structlog.get_logger(__name__)


@crm.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=100)
    description: String(max_length=300)
    price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(required=True, min_value=0, max_value=MAX_QUANTITY)
    category: String(required=True, max_length=50)


@crm.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            stock_quantity=command.stock_quantity,
            category=command.category,
        )
        current_domain.repository_for(Product).add(product)

        logger.info(
            "product_added",
            product_id=str(product.id),
            product_guid=product.product_guid,
            name=product.name,
        )
        return str(product.id)
