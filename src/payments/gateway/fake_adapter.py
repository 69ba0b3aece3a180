"""Configurable fake payment gateway for development and testing.

This adapter simulates a hosted checkout without any external calls.
Sessions are kept in memory; ``complete_session`` plays the part of the
buyer paying on the hosted page. It can be configured at runtime to fail,
making it useful for:
- Automated tests with predictable outcomes
- Development without real gateway credentials
"""

from uuid import uuid4

from payments.gateway.port import (
    SESSION_COMPLETE,
    CheckoutSession,
    CheckoutSessionResult,
    LineItem,
    PaymentGateway,
)
from shared.errors import SessionCreationError, UpstreamLookupError


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    checkout_url = "https://checkout.fake.test/pay"

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []
        self.sessions: dict[str, CheckoutSession] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_session(
        self,
        line_item: LineItem,
        customer_email: str | None,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionResult:
        self.calls.append(
            {
                "method": "create_session",
                "line_item": line_item,
                "customer_email": customer_email,
                "metadata": dict(metadata),
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )
        if not self.should_succeed:
            raise SessionCreationError(self.failure_reason)

        session_id = f"cs_fake_{uuid4().hex[:16]}"
        url = f"{self.checkout_url}/{session_id}"
        self.sessions[session_id] = CheckoutSession(
            session_id=session_id,
            status="open",
            amount_total=line_item.unit_amount * line_item.quantity,
            metadata=dict(metadata),
            url=url,
        )
        return CheckoutSessionResult(session_id=session_id, url=url)

    def retrieve_session(self, session_id: str) -> CheckoutSession:
        self.calls.append({"method": "retrieve_session", "session_id": session_id})
        if not self.should_succeed:
            raise UpstreamLookupError(self.failure_reason)

        session = self.sessions.get(session_id)
        if session is None:
            raise UpstreamLookupError(f"No such checkout session '{session_id}'", not_found=True)
        return session

    def complete_session(self, session_id: str, payment_intent_id: str | None = None) -> CheckoutSession:
        """Mark a session paid, as the hosted page would after a successful charge."""
        session = self.sessions[session_id]
        completed = CheckoutSession(
            session_id=session.session_id,
            status=SESSION_COMPLETE,
            payment_intent_id=payment_intent_id or f"pi_fake_{uuid4().hex[:16]}",
            amount_total=session.amount_total,
            metadata=session.metadata,
            url=session.url,
        )
        self.sessions[session_id] = completed
        return completed

    def add_session(self, session: CheckoutSession) -> None:
        """Register a session directly, bypassing create_session."""
        self.sessions[session.session_id] = session
