"""Checkout session initiation: command and handler.

Turns a cart-like request into a hosted checkout session. The product id and
a customer snapshot ride along in the session metadata, which is where
reconciliation reads them back once the buyer has paid.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from payments.checkout.checkout import Checkout
from payments.domain import payments
from payments.gateway import get_gateway
from payments.gateway.port import LineItem

logger = structlog.get_logger(__name__)

# Session metadata keys, read back by reconciliation
METADATA_PRODUCT_ID = "productId"
METADATA_CUSTOMER_NAME = "customer_name"
METADATA_CUSTOMER_EMAIL = "customer_email"

# Replaced by the gateway with the real session id on redirect
SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


@payments.command(part_of="Checkout")
class CreateCheckoutSession:
    """Start a hosted checkout for one product."""

    product_id: Identifier()
    name: String(max_length=255)
    description: Text()
    image: String(max_length=2048, sanitize=False)
    price: Float()
    quantity: Integer()
    customer_name: String(max_length=255)
    customer_email: String(max_length=254)
    client_domain: String(required=True, max_length=2048, sanitize=False)
    currency: String(max_length=3, default="usd")


@payments.command_handler(part_of=Checkout)
class CheckoutHandler:
    @handle(CreateCheckoutSession)
    def create_checkout_session(self, command):
        _validate(command)

        client_domain = command.client_domain.rstrip("/")
        line_item = LineItem(
            name=command.name or command.product_id,
            unit_amount=round(command.price * 100),
            quantity=command.quantity,
            currency=command.currency,
            description=command.description,
            image=command.image,
        )
        metadata = {
            METADATA_PRODUCT_ID: command.product_id,
            METADATA_CUSTOMER_NAME: command.customer_name or "",
            METADATA_CUSTOMER_EMAIL: command.customer_email or "",
        }

        result = get_gateway().create_session(
            line_item=line_item,
            customer_email=command.customer_email,
            metadata=metadata,
            success_url=f"{client_domain}/paymentSuccessful?session_id={SESSION_ID_PLACEHOLDER}",
            cancel_url=f"{client_domain}/product/{command.product_id}",
        )

        checkout = Checkout(
            session_id=result.session_id,
            product_id=command.product_id,
            product_name=line_item.name,
            unit_amount=line_item.unit_amount,
            quantity=line_item.quantity,
            currency=line_item.currency,
            customer_name=command.customer_name or "",
            customer_email=command.customer_email,
            url=result.url,
            created_at=datetime.now(UTC),
        )
        current_domain.repository_for(Checkout).record(checkout)

        logger.info(
            "Checkout session created",
            session_id=result.session_id,
            product_id=command.product_id,
            unit_amount=line_item.unit_amount,
            quantity=line_item.quantity,
        )
        return result


def _validate(command: CreateCheckoutSession) -> None:
    errors: dict[str, list[str]] = {}
    if not command.product_id:
        errors["productId"] = ["Product id is required"]
    if command.price is None:
        errors["price"] = ["Price is required"]
    elif command.price <= 0:
        errors["price"] = ["Price must be a positive number"]
    if command.quantity is None:
        errors["quantity"] = ["Quantity is required"]
    elif command.quantity <= 0:
        errors["quantity"] = ["Quantity must be a positive integer"]
    if errors:
        raise ValidationError(errors)
