"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and StripeGateway
(production) without changing any domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

SESSION_COMPLETE = "complete"


@dataclass(frozen=True)
class LineItem:
    """The single product sold by a hosted checkout session."""

    name: str
    unit_amount: int  # minor currency units
    quantity: int
    currency: str = "usd"
    description: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class CheckoutSessionResult:
    """Result of creating a hosted checkout session."""

    session_id: str
    url: str


@dataclass(frozen=True)
class CheckoutSession:
    """A checkout session as reported by the gateway. Read-only to us."""

    session_id: str
    status: str
    payment_intent_id: str | None = None
    amount_total: int = 0
    metadata: dict[str, str] = field(default_factory=dict)
    url: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.status == SESSION_COMPLETE


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_session(
        self,
        line_item: LineItem,
        customer_email: str | None,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionResult:
        """Create a hosted checkout session. Raises SessionCreationError."""
        ...

    @abstractmethod
    def retrieve_session(self, session_id: str) -> CheckoutSession:
        """Fetch a session by id. Raises UpstreamLookupError."""
        ...
