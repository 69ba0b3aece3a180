"""Catalogue calls made on behalf of other bounded contexts.

Each call pushes the catalogue's domain context, so it can run from inside
another domain's command handler.
"""

from catalogue.domain import catalogue
from catalogue.product.product import Product


def find_product(product_id: str) -> Product | None:
    with catalogue.domain_context():
        return catalogue.repository_for(Product).find_product(product_id)


def decrement_stock(product_id: str, by: int = 1) -> bool:
    with catalogue.domain_context():
        return catalogue.repository_for(Product).decrement_quantity(product_id, by=by)
