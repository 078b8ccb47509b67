"""Repository for the Product aggregate."""

from collections.abc import Iterable

from catalogue.product.product import Product
from shared.domain import crm
from shared.exceptions import not_found


@crm.repository(part_of=Product)
class ProductRepository:
    def find_product(self, product_id) -> Product | None:
        products = self._dao.query.filter(id=str(product_id)).all().items
        return products[0] if products else None

    def get_product(self, product_id) -> Product:
        product = self.find_product(product_id)
        if product is None:
            raise not_found(f"Product with ID {product_id} not found")
        return product

    def get_many(self, product_ids: Iterable) -> dict[str, Product]:
        """Load every requested product, failing on the first id that does not exist."""
        return {str(product_id): self.get_product(product_id) for product_id in product_ids}

    def list_products(self) -> list[Product]:
        return sorted(self._dao.query.all().items, key=lambda product: product.created_at)
