"""Service container: the composition root for storage, gateway and verifier.

Built once per process by the FastAPI lifespan (or by a test), initialized
with ``init()`` and released with ``close()``. ``init()`` binds the MongoDB
database the domain repositories write to (when the Mongo backend is
selected) and installs the payment gateway the command handlers use.
"""

from dataclasses import dataclass

from fastapi import Request
from pymongo import MongoClient

from catalogue.domain import catalogue
from catalogue.product.product import Product
from identity.verifier import IdentityVerifier, build_verifier
from ordering.domain import ordering
from ordering.order.order import Order
from payments.checkout.checkout import Checkout
from payments.domain import payments
from payments.gateway import PaymentGateway, build_gateway, reset_gateway, set_gateway
from shared.config import Settings
from shared.logging import get_logger
from shared.mongo import bind_database, connect, unbind_database

logger = get_logger(__name__)

# Repositories whose collections live in the bound Mongo database
REPOSITORIES = {
    "products": (catalogue, Product),
    "orders": (ordering, Order),
    "checkouts": (payments, Checkout),
}


def setup_collections(collections=None) -> None:
    """Create the indexes of the given (or all) collections in the bound database."""
    for name in collections or list(REPOSITORIES):
        domain, aggregate = REPOSITORIES[name]
        with domain.domain_context():
            domain.repository_for(aggregate).setup_indexes()


def drop_collections(collections=None) -> None:
    for name in collections or list(REPOSITORIES):
        domain, aggregate = REPOSITORIES[name]
        with domain.domain_context():
            domain.repository_for(aggregate).drop_collection()


@dataclass
class Services:
    settings: Settings
    gateway: PaymentGateway
    verifier: IdentityVerifier
    mongo_client: MongoClient | None = None

    def init(self) -> None:
        """Verify connectivity, prepare storage and install the gateway."""
        if self.mongo_client is not None:
            self.mongo_client.admin.command("ping")
            logger.info("Pinged MongoDB deployment", database=self.settings.mongodb_database)
            bind_database(self.mongo_client[self.settings.mongodb_database])
            setup_collections()
        set_gateway(self.gateway)
        logger.info(
            "Services initialized",
            store=self.settings.store_backend,
            gateway=type(self.gateway).__name__,
            verifier=type(self.verifier).__name__,
        )

    def close(self) -> None:
        reset_gateway()
        if self.mongo_client is not None:
            unbind_database()
            self.mongo_client.close()
            self.mongo_client = None
        logger.info("Services closed")


def build_services(settings: Settings) -> Services:
    """Construct the adapters selected by ``settings``. Does not connect yet."""
    mongo_client = connect(settings.mongodb_uri) if settings.store_backend == "mongo" else None
    return Services(
        settings=settings,
        gateway=build_gateway(settings),
        verifier=build_verifier(settings),
        mongo_client=mongo_client,
    )


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the container attached to the app."""
    return request.app.state.services
