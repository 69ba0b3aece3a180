"""Stripe payment gateway adapter.

Uses Stripe Checkout: one hosted session per purchase, in ``payment`` mode.
The API key is passed per request so several gateways with different keys
can coexist in one process.
"""

import stripe
import structlog

from payments.gateway.port import CheckoutSession, CheckoutSessionResult, LineItem, PaymentGateway
from shared.errors import SessionCreationError, UpstreamLookupError

logger = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def create_session(
        self,
        line_item: LineItem,
        customer_email: str | None,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionResult:
        product_data = {"name": line_item.name}
        if line_item.description:
            product_data["description"] = line_item.description
        if line_item.image:
            product_data["images"] = [line_item.image]

        params = {
            "line_items": [
                {
                    "price_data": {
                        "currency": line_item.currency,
                        "product_data": product_data,
                        "unit_amount": line_item.unit_amount,
                    },
                    "quantity": line_item.quantity,
                }
            ],
            "mode": "payment",
            "metadata": metadata,
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        if customer_email:
            params["customer_email"] = customer_email

        try:
            session = stripe.checkout.Session.create(api_key=self.api_key, **params)
        except stripe.StripeError as exc:
            logger.error("Stripe refused to create checkout session", error=str(exc))
            raise SessionCreationError("Could not create checkout session", {"gateway": [str(exc)]}) from exc

        data = session.to_dict()
        return CheckoutSessionResult(session_id=data["id"], url=data["url"])

    def retrieve_session(self, session_id: str) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)
        except stripe.InvalidRequestError as exc:
            not_found = exc.http_status == 404
            raise UpstreamLookupError(
                f"No such checkout session '{session_id}'" if not_found else "Invalid checkout session lookup",
                {"session_id": [str(exc)]},
                not_found=not_found,
            ) from exc
        except stripe.StripeError as exc:
            logger.error("Stripe session lookup failed", session_id=session_id, error=str(exc))
            raise UpstreamLookupError("Payment gateway unavailable", {"gateway": [str(exc)]}) from exc

        return to_checkout_session(session.to_dict())


def to_checkout_session(data: dict) -> CheckoutSession:
    """Map a Stripe Checkout Session payload onto the gateway-neutral type."""
    payment_intent = data.get("payment_intent")
    if payment_intent is not None and not isinstance(payment_intent, str):
        # Expanded PaymentIntent object
        payment_intent = payment_intent["id"]

    metadata = data.get("metadata") or {}
    return CheckoutSession(
        session_id=data["id"],
        status=data.get("status") or "",
        payment_intent_id=payment_intent,
        amount_total=data.get("amount_total") or 0,
        metadata={key: str(value) for key, value in dict(metadata).items()},
        url=data.get("url"),
    )
