"""Read-side access to orders: by customer, by manager, or all."""

from protean.utils.globals import current_domain

from ordering.order.order import Order


def list_orders(customer_email: str | None = None, manager_email: str | None = None) -> list[Order]:
    return current_domain.repository_for(Order).listing(customer_email=customer_email, manager_email=manager_email)
