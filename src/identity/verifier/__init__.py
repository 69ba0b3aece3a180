"""Identity verifier factory."""

from identity.verifier.fake_adapter import FakeVerifier
from identity.verifier.firebase_adapter import FirebaseVerifier
from identity.verifier.port import Identity, IdentityVerifier
from shared.config import Settings

__all__ = ["Identity", "IdentityVerifier", "FakeVerifier", "FirebaseVerifier", "build_verifier"]


def build_verifier(settings: Settings) -> IdentityVerifier:
    """Return the verifier configured by ``IDENTITY_VERIFIER``."""
    if settings.identity_verifier == "firebase":
        return FirebaseVerifier(project_id=settings.firebase_project_id)
    return FakeVerifier()
