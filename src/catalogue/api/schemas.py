"""Pydantic request/response schemas for the Catalogue API.

Wire contracts only; the Product aggregate and commands stay internal.
"""

from pydantic import Field

from catalogue.product.product import Product
from shared.schemas import CamelModel


class ManagerSchema(CamelModel):
    name: str = ""
    email: str


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateProductRequest(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""
    category: str = ""
    image: str | None = None
    price: float = Field(ge=0)
    quantity: int = Field(ge=0)
    manager: ManagerSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ceramic Mug",
                    "description": "Hand-thrown stoneware mug",
                    "category": "Kitchen",
                    "image": "https://cdn.example.com/mug.jpg",
                    "price": 25.0,
                    "quantity": 5,
                    "manager": {"name": "Sam Seller", "email": "sam@example.com"},
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductCreatedResponse(CamelModel):
    acknowledged: bool = True
    inserted_id: str


class ProductResponse(CamelModel):
    id: str = Field(alias="_id")
    name: str
    description: str
    category: str
    image: str | None = None
    price: float
    quantity: int
    manager: ManagerSchema

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            category=product.category,
            image=product.image,
            price=product.price,
            quantity=product.quantity,
            manager=ManagerSchema(name=product.manager.name, email=product.manager.email),
        )
