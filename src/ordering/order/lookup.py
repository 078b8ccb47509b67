"""Order lookup by GUID and by customer."""

from protean.utils.globals import current_domain

from identity.user.user import User
from ordering.order.order import Order
from shared.exceptions import not_found


def get_order(order_guid) -> Order:
    return current_domain.repository_for(Order).get_by_guid(order_guid)


def list_customer_orders(customer_id) -> list[Order]:
    if current_domain.repository_for(User).find_user(customer_id) is None:
        raise not_found(f"Customer with ID {customer_id} not found")
    return current_domain.repository_for(Order).list_for_customer(customer_id)
