"""Static-table identity verifier for development and testing."""

from identity.verifier.port import Identity, IdentityVerifier
from shared.errors import AuthError


class FakeVerifier(IdentityVerifier):
    """Accepts only tokens that were registered up front."""

    def __init__(self, tokens: dict[str, Identity] | None = None) -> None:
        self.tokens: dict[str, Identity] = dict(tokens or {})

    def register(self, token: str, email: str, name: str | None = None) -> Identity:
        identity = Identity(email=email, uid=f"fake-{email}", name=name)
        self.tokens[token] = identity
        return identity

    def verify(self, token: str) -> Identity:
        identity = self.tokens.get(token)
        if identity is None:
            raise AuthError("Unauthorized Access!")
        return identity
