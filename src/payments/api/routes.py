"""FastAPI routes for the Payments domain: hosted checkout sessions.

Session creation is a blocking gateway call, so the handler is a plain
function that FastAPI runs in its threadpool.
"""

from fastapi import APIRouter, Request
from protean.utils.globals import current_domain

from payments.api.schemas import CheckoutSessionResponse, CreateCheckoutSessionRequest
from payments.checkout.initiation import CreateCheckoutSession

checkout_router = APIRouter(prefix="/checkout-sessions", tags=["payments"])


@checkout_router.post("", response_model=CheckoutSessionResponse)
def create_checkout_session(body: CreateCheckoutSessionRequest, request: Request) -> CheckoutSessionResponse:
    """Start a hosted checkout and return the page to redirect the buyer to."""
    settings = request.app.state.settings
    customer = body.customer
    command = CreateCheckoutSession(
        product_id=body.product_id,
        name=body.name,
        description=body.description,
        image=body.image,
        price=body.price,
        quantity=body.quantity,
        customer_name=customer.customer if customer else "",
        customer_email=customer.email if customer else None,
        client_domain=settings.client_domain,
        currency=settings.checkout_currency,
    )
    result = current_domain.process(command, asynchronous=False)
    return CheckoutSessionResponse(url=result.url)
