"""Pydantic request/response schemas for the Payments API.

Wire contracts only; commands stay internal.
"""

from pydantic import Field

from shared.schemas import CamelModel


class CustomerSchema(CamelModel):
    customer: str = ""  # display name
    email: str | None = None


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateCheckoutSessionRequest(CamelModel):
    product_id: str = Field(min_length=1)
    name: str = ""
    description: str | None = None
    image: str | None = None
    price: float = Field(gt=0)
    quantity: int = Field(gt=0)
    customer: CustomerSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "productId": "665f1c2e9b1e8a0012345678",
                    "name": "Ceramic Mug",
                    "description": "Hand-thrown stoneware mug",
                    "image": "https://cdn.example.com/mug.jpg",
                    "price": 25.0,
                    "quantity": 1,
                    "customer": {"customer": "Alex Buyer", "email": "alex@example.com"},
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CheckoutSessionResponse(CamelModel):
    url: str
