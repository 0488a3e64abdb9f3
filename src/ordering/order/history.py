"""Order history reads for buyers and sellers."""

from protean.utils.globals import current_domain

from ordering.order.order import Order


def orders_for_customer(customer_id) -> list[Order]:
    """Settled orders of one buyer, newest first."""
    return current_domain.repository_for(Order).settled_for_customer(customer_id)


def all_settled_orders() -> list[Order]:
    """Settled orders across all buyers, newest first."""
    return current_domain.repository_for(Order).settled()


def get_order(order_id) -> Order:
    return current_domain.repository_for(Order).get(str(order_id))
