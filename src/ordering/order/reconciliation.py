"""Payment reconciliation: turns a paid checkout session into an order.

The client calls back with the checkout session id after the hosted payment
page redirects. Reconciliation is idempotent per payment transaction:

    session complete, no order yet, product present
        -> insert order (unique on transaction id), then decrement stock by 1
    order already exists for the transaction
        -> return it unchanged (replay)
    unique insert collides with a concurrent callback
        -> read the winner and return it (replay, no decrement)
    session not complete, no order
        -> PaymentNotCompleteError
    session complete, no order, product gone
        -> NotFoundError

The sequence is synchronous and runs to completion once started; there is
no point at which a disconnecting caller can abandon it half-applied.
"""

from dataclasses import dataclass

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from catalogue.product.stock import decrement_stock, find_product
from ordering.domain import ordering
from ordering.order.order import ORDER_QUANTITY, Order
from payments.checkout.initiation import (
    METADATA_CUSTOMER_EMAIL,
    METADATA_CUSTOMER_NAME,
    METADATA_PRODUCT_ID,
)
from payments.gateway import get_gateway
from payments.gateway.port import CheckoutSession
from shared.errors import ConflictError, NotFoundError, PaymentNotCompleteError

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class ReconcilePayment:
    """Record the order for a checkout session the buyer has paid."""

    session_id = String(required=True, max_length=255)


@dataclass(frozen=True)
class ReconciliationResult:
    transaction_id: str
    order_id: str
    created: bool


@ordering.command_handler(part_of=Order)
class ReconciliationHandler:
    @handle(ReconcilePayment)
    def reconcile(self, command):
        session_id = (command.session_id or "").strip()
        if not session_id:
            raise ValidationError({"sessionId": ["Session id is required"]})

        orders = current_domain.repository_for(Order)
        session = get_gateway().retrieve_session(session_id)
        transaction_id = session.payment_intent_id

        existing = orders.find_by_transaction_id(transaction_id)
        if existing is not None:
            return _replay(existing, session)

        if not session.is_complete or not transaction_id:
            logger.info("Checkout session not paid yet", session_id=session_id, status=session.status)
            raise PaymentNotCompleteError(
                "Payment has not been completed",
                {"status": [f"Checkout session is '{session.status}'"]},
            )

        product_id = session.metadata.get(METADATA_PRODUCT_ID, "")
        product = find_product(product_id)
        if product is None:
            logger.warning(
                "Paid checkout references a missing product",
                session_id=session_id,
                transaction_id=transaction_id,
                product_id=product_id,
            )
            raise NotFoundError("Product not found", {"productId": [f"No product with id '{product_id}'"]})

        order = Order.place(
            product=product,
            transaction_id=transaction_id,
            amount_total=session.amount_total,
            customer_email=session.metadata.get(METADATA_CUSTOMER_EMAIL, ""),
            customer_name=session.metadata.get(METADATA_CUSTOMER_NAME, ""),
        )
        try:
            order_id = orders.insert_unique(order)
        except ConflictError:
            # A concurrent callback for the same payment inserted first.
            winner = orders.find_by_transaction_id(transaction_id)
            if winner is None:
                raise
            return _replay(winner, session)

        if not decrement_stock(str(product.id), by=ORDER_QUANTITY):
            logger.warning(
                "Order recorded but product stock was already exhausted",
                order_id=order_id,
                product_id=str(product.id),
                transaction_id=transaction_id,
            )

        logger.info(
            "Order created from paid checkout",
            order_id=order_id,
            transaction_id=transaction_id,
            product_id=str(product.id),
            price=order.price,
        )
        return ReconciliationResult(transaction_id=transaction_id, order_id=order_id, created=True)


def _replay(order: Order, session: CheckoutSession) -> ReconciliationResult:
    charged = round(session.amount_total / 100, 2)
    if charged != order.price:
        logger.warning(
            "Replayed confirmation amount differs from recorded order",
            order_id=str(order.id),
            transaction_id=order.transaction_id,
            order_price=order.price,
            session_amount=charged,
        )
    logger.info("Payment already reconciled", order_id=str(order.id), transaction_id=order.transaction_id)
    return ReconciliationResult(transaction_id=order.transaction_id, order_id=str(order.id), created=False)
