"""Pydantic request/response schemas for the Ordering API."""

from datetime import datetime

from pydantic import Field

from ordering.order.order import Order
from shared.schemas import CamelModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PaymentConfirmationRequest(CamelModel):
    session_id: str = Field(min_length=1)

    model_config = {"json_schema_extra": {"examples": [{"sessionId": "cs_test_a1b2c3"}]}}


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PaymentConfirmationResponse(CamelModel):
    transaction_id: str
    order_id: str


class ManagerSnapshotSchema(CamelModel):
    name: str = ""
    email: str


class OrderResponse(CamelModel):
    id: str = Field(alias="_id")
    product_id: str
    transaction_id: str
    customer_email: str
    customer_name: str
    status: str
    manager: ManagerSnapshotSchema
    product_name: str
    category: str
    quantity: int
    price: float
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            product_id=str(order.product_id),
            transaction_id=order.transaction_id,
            customer_email=order.customer_email,
            customer_name=order.customer_name,
            status=order.status,
            manager=ManagerSnapshotSchema(name=order.manager.name, email=order.manager.email),
            product_name=order.product_name,
            category=order.category,
            quantity=order.quantity,
            price=order.price,
            created_at=order.created_at,
        )


class DeleteOrderResponse(CamelModel):
    acknowledged: bool = True
    deleted_count: int
