"""Identity verifier port (abstract interface).

Verifies a bearer token issued by the external identity provider and
returns who it belongs to. Handlers receive the resulting Identity as an
explicit argument; nothing is stashed on the request.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """An authenticated caller."""

    email: str
    uid: str | None = None
    name: str | None = None


class IdentityVerifier(ABC):
    @abstractmethod
    def verify(self, token: str) -> Identity:
        """Return the token's identity. Raises AuthError when invalid."""
        ...
