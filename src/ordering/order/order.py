"""Order aggregate: a paid purchase of one unit of a product.

An order is created exactly once per payment transaction by the
reconciliation flow. It snapshots the product and its manager at the time of
purchase so later catalogue edits do not rewrite order history.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, ValueObject

from ordering.domain import ordering

# One unit per transaction, whatever quantity the checkout charged for.
ORDER_QUANTITY = 1


class OrderStatus(Enum):
    PENDING = "pending"


@ordering.value_object(part_of="Order")
class ManagerSnapshot:
    """The product's manager as it was when the order was placed."""

    name: String(max_length=255, default="")
    email: String(required=True, max_length=254)


@ordering.aggregate(limit=-1)
class Order:
    """Order aggregate root."""

    product_id: Identifier(required=True)
    transaction_id: String(required=True, max_length=255, unique=True)
    customer_email: String(max_length=254, default="")
    customer_name: String(max_length=255, default="")
    status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    manager: ValueObject(ManagerSnapshot, required=True)
    product_name: String(required=True, max_length=255)
    category: String(max_length=100, default="")
    quantity: Integer(min_value=1, default=ORDER_QUANTITY)
    price: Float(required=True, min_value=0.0)
    created_at: DateTime()

    @classmethod
    def place(cls, product, transaction_id, amount_total, customer_email="", customer_name=""):
        """Create a pending order for a completed payment.

        ``product`` is the catalogue product being bought and ``amount_total``
        is what the gateway charged, in minor currency units.
        """
        if amount_total is None or amount_total < 0:
            raise ValidationError({"price": ["Charged amount cannot be negative"]})

        return cls(
            product_id=str(product.id),
            transaction_id=transaction_id,
            customer_email=customer_email or "",
            customer_name=customer_name or "",
            status=OrderStatus.PENDING.value,
            manager=ManagerSnapshot(name=product.manager.name, email=product.manager.email),
            product_name=product.name,
            category=product.category or "",
            quantity=ORDER_QUANTITY,
            price=round(amount_total / 100, 2),
            created_at=datetime.now(UTC),
        )
