"""Read-side access to the catalogue."""

from protean.utils.globals import current_domain

from catalogue.product.product import Product
from shared.errors import NotFoundError


def list_products(manager_email: str | None = None) -> list[Product]:
    return current_domain.repository_for(Product).listing(manager_email=manager_email)


def get_product(product_id: str) -> Product:
    product = current_domain.repository_for(Product).find_product(product_id)
    if product is None:
        raise NotFoundError("Product not found", {"product_id": [f"No product with id '{product_id}'"]})
    return product
