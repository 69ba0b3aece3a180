"""Error taxonomy shared by every bounded context.

Each error carries the HTTP status the API layer answers with, so handlers
raise domain errors and never build responses themselves. Field validation
failures use protean's ``ValidationError`` and are mapped to 400 alongside
these.
"""


class StorefrontError(Exception):
    """Base class for all errors raised by the storefront domain."""

    status_code = 500

    def __init__(self, message: str, errors: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class AuthError(StorefrontError):
    """Missing or invalid bearer token on a protected route."""

    status_code = 401


class NotFoundError(StorefrontError):
    """A product or order lookup came back empty."""

    status_code = 404


class ConflictError(StorefrontError):
    """A unique insert collided with an existing record.

    Reconciliation absorbs this and falls back to the replay path.
    """

    status_code = 409


class PaymentNotCompleteError(StorefrontError):
    """The checkout session exists but has not been paid."""

    status_code = 409


class UpstreamLookupError(StorefrontError):
    """The payment gateway could not return the requested session."""

    def __init__(self, message: str, errors: dict | None = None, not_found: bool = False) -> None:
        super().__init__(message, errors)
        self.not_found = not_found
        self.status_code = 404 if not_found else 502


class SessionCreationError(StorefrontError):
    """The payment gateway refused or failed to create a checkout session."""

    status_code = 502


class StorageError(StorefrontError):
    """A stored record no longer satisfies the aggregate it is loaded into."""

    status_code = 500
