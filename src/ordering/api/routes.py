"""FastAPI routes for the Ordering domain: payment confirmations and orders.

Reconciliation calls the payment gateway and the stores, so these handlers
are plain functions that FastAPI runs in its threadpool.
"""

from fastapi import APIRouter, Depends, Query, Response
from protean.utils.globals import current_domain

from identity.api.dependencies import require_identity
from identity.verifier.port import Identity
from ordering.api.schemas import (
    DeleteOrderResponse,
    OrderResponse,
    PaymentConfirmationRequest,
    PaymentConfirmationResponse,
)
from ordering.order.deletion import DeleteOrder
from ordering.order.queries import list_orders as fetch_orders
from ordering.order.reconciliation import ReconcilePayment

# ---------------------------------------------------------------------------
# Payment Confirmation Router
# ---------------------------------------------------------------------------
confirmation_router = APIRouter(prefix="/payment-confirmations", tags=["payments"])


@confirmation_router.post("", response_model=PaymentConfirmationResponse)
def confirm_payment(body: PaymentConfirmationRequest, response: Response) -> PaymentConfirmationResponse:
    """Record the order for a paid checkout session.

    Answers 201 the first time a payment is reconciled and 200 on replays.
    """
    result = current_domain.process(ReconcilePayment(session_id=body.session_id), asynchronous=False)
    response.status_code = 201 if result.created else 200
    return PaymentConfirmationResponse(transaction_id=result.transaction_id, order_id=result.order_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse], dependencies=[Depends(require_identity)])
def list_orders(
    customer_email: str | None = Query(default=None, alias="customerEmail"),
    manager_email: str | None = Query(default=None, alias="managerEmail"),
) -> list[OrderResponse]:
    """List all orders, a customer's orders, or the orders for a manager's products."""
    orders = fetch_orders(customer_email=customer_email, manager_email=manager_email)
    return [OrderResponse.from_domain(order) for order in orders]


@order_router.delete("/{order_id}", response_model=DeleteOrderResponse)
def delete_order(order_id: str, identity: Identity = Depends(require_identity)) -> DeleteOrderResponse:
    current_domain.process(DeleteOrder(order_id=order_id, requested_by=identity.email), asynchronous=False)
    return DeleteOrderResponse(deleted_count=1)
