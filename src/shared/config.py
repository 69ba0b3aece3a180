"""Runtime configuration read from the environment.

Values come from process environment variables, optionally seeded from a
``.env`` file in the working directory. ``APP_ENV`` selects the overlay:

    development  -> memory store, fake gateway, fake verifier (defaults)
    test         -> same as development, quiet logging
    production   -> fake adapters are refused
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

STORE_BACKENDS = ("memory", "mongo")
PAYMENT_GATEWAYS = ("fake", "stripe")
IDENTITY_VERIFIERS = ("fake", "firebase")


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    port: int = 3000
    client_domain: str = "http://localhost:5173"
    store_backend: str = "memory"
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "productsDb"
    payment_gateway: str = "fake"
    stripe_secret_key: str = ""
    checkout_currency: str = "usd"
    identity_verifier: str = "fake"
    firebase_project_id: str = ""

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        settings = cls(
            env=env.get("APP_ENV", "development").lower(),
            port=int(env.get("PORT", "3000")),
            client_domain=env.get("CLIENT_DOMAIN", cls.client_domain).rstrip("/"),
            store_backend=env.get("STORE_BACKEND", "memory").lower(),
            mongodb_uri=env.get("MONGODB_URI", cls.mongodb_uri),
            mongodb_database=env.get("MONGODB_DATABASE", cls.mongodb_database),
            payment_gateway=env.get("PAYMENT_GATEWAY", "fake").lower(),
            stripe_secret_key=env.get("STRIPE_SECRET_KEY", ""),
            checkout_currency=env.get("CHECKOUT_CURRENCY", "usd").lower(),
            identity_verifier=env.get("IDENTITY_VERIFIER", "fake").lower(),
            firebase_project_id=env.get("FIREBASE_PROJECT_ID", ""),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Reject combinations that cannot start."""
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(f"Unknown STORE_BACKEND '{self.store_backend}', expected one of {STORE_BACKENDS}")
        if self.payment_gateway not in PAYMENT_GATEWAYS:
            raise ValueError(f"Unknown PAYMENT_GATEWAY '{self.payment_gateway}', expected one of {PAYMENT_GATEWAYS}")
        if self.identity_verifier not in IDENTITY_VERIFIERS:
            raise ValueError(
                f"Unknown IDENTITY_VERIFIER '{self.identity_verifier}', expected one of {IDENTITY_VERIFIERS}"
            )
        if self.payment_gateway == "stripe" and not self.stripe_secret_key:
            raise ValueError("STRIPE_SECRET_KEY is required when PAYMENT_GATEWAY=stripe")
        if self.identity_verifier == "firebase" and not self.firebase_project_id:
            raise ValueError("FIREBASE_PROJECT_ID is required when IDENTITY_VERIFIER=firebase")
        if self.is_production and "fake" in (self.payment_gateway, self.identity_verifier):
            raise ValueError("Fake payment gateway and identity verifier are not allowed in production")


def load_settings() -> Settings:
    """Load ``.env`` (without overriding the real environment) and build Settings."""
    load_dotenv(override=False)
    return Settings.from_env()
