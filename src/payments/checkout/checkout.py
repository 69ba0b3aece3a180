"""Checkout aggregate: a hosted checkout session this service started.

The gateway owns the session and its payment state. This record keeps what
was offered to the buyer when the session was opened.
"""

from protean.fields import DateTime, Identifier, Integer, String

from payments.domain import payments


@payments.aggregate(limit=-1)
class Checkout:
    """Checkout aggregate root."""

    session_id: String(required=True, max_length=255, unique=True)
    product_id: Identifier(required=True)
    product_name: String(max_length=255, default="")
    unit_amount: Integer(required=True, min_value=0)
    quantity: Integer(required=True, min_value=1)
    currency: String(max_length=3, default="usd")
    customer_name: String(max_length=255, default="")
    customer_email: String(max_length=254)
    url: String(max_length=2048, sanitize=False)
    created_at: DateTime()

    @property
    def amount_total(self) -> int:
        return self.unit_amount * self.quantity
