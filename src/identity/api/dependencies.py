"""FastAPI dependencies for bearer-token authentication."""

from fastapi import Depends, Header

from identity.verifier.port import Identity
from services import Services, get_services
from shared.errors import AuthError
from shared.logging import add_context


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_identity(
    authorization: str | None = Header(default=None),
    services: Services = Depends(get_services),
) -> Identity:
    """Verify the caller's bearer token and return who they are."""
    token = bearer_token(authorization)
    if token is None:
        raise AuthError("Unauthorized Access!", {"authorization": ["Missing bearer token"]})

    identity = services.verifier.verify(token)
    add_context(caller_email=identity.email)
    return identity
