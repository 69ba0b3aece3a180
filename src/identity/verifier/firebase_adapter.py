"""Firebase ID-token verifier backed by google-auth.

Tokens are checked against Google's published Firebase signing certificates
and must be issued for the configured project.
"""

import structlog
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from identity.verifier.port import Identity, IdentityVerifier
from shared.errors import AuthError

logger = structlog.get_logger(__name__)


class FirebaseVerifier(IdentityVerifier):
    def __init__(self, project_id: str) -> None:
        self.project_id = project_id
        self._request = google_requests.Request()

    def verify(self, token: str) -> Identity:
        try:
            claims = id_token.verify_firebase_token(token, self._request, audience=self.project_id)
        except (ValueError, google_exceptions.GoogleAuthError) as exc:
            logger.info("Rejected identity token", error=str(exc))
            raise AuthError("Unauthorized Access!") from exc

        if not claims or not claims.get("email"):
            raise AuthError("Unauthorized Access!", {"token": ["Token carries no email claim"]})
        return Identity(email=claims["email"], uid=claims.get("user_id") or claims.get("sub"), name=claims.get("name"))
