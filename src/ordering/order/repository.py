"""Repository for the Order aggregate."""

from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderItem
from shared.domain import crm
from shared.exceptions import not_found


@crm.repository(part_of=Order)
class OrderRepository:
    def get_by_guid(self, order_guid) -> Order:
        orders = self._dao.query.filter(order_guid=str(order_guid)).all().items
        if not orders:
            raise not_found(f"Order with GUID {order_guid} not found")
        return orders[0]

    def list_for_customer(self, customer_id) -> list[Order]:
        """Newest first."""
        orders = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return sorted(orders, key=lambda order: order.order_date, reverse=True)

    def remove_order(self, order: Order) -> None:
        """Delete the order and its lines."""
        items = current_domain.repository_for(OrderItem)._dao
        for item in list(order.items):
            items.delete(item)
        self._dao.delete(order)
