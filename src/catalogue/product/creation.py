"""Product creation: command and handler."""

import structlog
from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text()
    category: String(max_length=100)
    image: String(max_length=2048, sanitize=False)
    price: Float(required=True)
    quantity: Integer(required=True)
    manager_name: String(max_length=255)
    manager_email: String(required=True, max_length=254)


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            category=command.category,
            image=command.image,
            price=command.price,
            quantity=command.quantity,
            manager_name=command.manager_name,
            manager_email=command.manager_email,
        )
        product_id = current_domain.repository_for(Product).store(product)
        logger.info(
            "Product listed",
            product_id=product_id,
            manager_email=command.manager_email,
            quantity=command.quantity,
        )
        return product_id
