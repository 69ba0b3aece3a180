import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Pin APP_ENV and PROTEAN_ENV so importing `app` builds test settings
    (memory store, fake gateway and verifier) and leaves logging unconfigured.
    """
    os.environ["APP_ENV"] = session.config.option.env
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


MANAGER_TOKEN = "manager-token"
CUSTOMER_TOKEN = "customer-token"


@pytest.fixture(scope="session", autouse=True)
def domains():
    """Initialize the catalogue, ordering and payments domains once per session."""
    from domains import DOMAINS, init_domains

    init_domains()
    return DOMAINS


@pytest.fixture(autouse=True)
def run_around_tests(domains):
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from payments.gateway import reset_gateway
    from shared.mongo import unbind_database

    unbind_database()
    reset_gateway()

    # Clear all databases and drain event stores, across every domain:
    #   reconciliation writes to the catalogue from the ordering domain.
    for domain in domains:
        for _, provider in domain.providers.items():
            provider._data_reset()
        domain.event_store.store._data_reset()


@pytest.fixture()
def settings():
    from shared.config import Settings

    return Settings(env="test", client_domain="http://shop.test")


@pytest.fixture()
def gateway():
    from payments.gateway import set_gateway
    from payments.gateway.fake_adapter import FakeGateway

    gateway = FakeGateway()
    set_gateway(gateway)
    return gateway


@pytest.fixture()
def verifier():
    from identity.verifier.fake_adapter import FakeVerifier

    verifier = FakeVerifier()
    verifier.register(MANAGER_TOKEN, email="sam@example.com", name="Sam Seller")
    verifier.register(CUSTOMER_TOKEN, email="alex@example.com", name="Alex Buyer")
    return verifier


@pytest.fixture()
def services(settings, gateway, verifier):
    from services import Services

    return Services(settings=settings, gateway=gateway, verifier=verifier)


@pytest.fixture()
def client(services):
    from app import create_app
    from fastapi.testclient import TestClient

    return TestClient(create_app(services=services))


@pytest.fixture()
def manager_headers():
    return {"Authorization": f"Bearer {MANAGER_TOKEN}"}


@pytest.fixture()
def customer_headers():
    return {"Authorization": f"Bearer {CUSTOMER_TOKEN}"}


@pytest.fixture()
def mongo_database():
    """A mongomock database bound to the domain repositories, indexes in place."""
    import mongomock
    from services import setup_collections
    from shared.mongo import bind_database

    database = mongomock.MongoClient(tz_aware=True)["productsDb"]
    bind_database(database)
    setup_collections()
    return database


@pytest.fixture()
def list_product():
    """Store a product through the catalogue's repository and return it."""
    from catalogue.domain import catalogue
    from catalogue.product.product import Product

    def _list_product(**overrides):
        defaults = {
            "name": "Ceramic Mug",
            "description": "Hand-thrown stoneware mug",
            "category": "Kitchen",
            "price": 25.0,
            "quantity": 5,
            "manager_email": "sam@example.com",
            "manager_name": "Sam Seller",
        }
        defaults.update(overrides)
        with catalogue.domain_context():
            repository = catalogue.repository_for(Product)
            product_id = repository.store(Product.create(**defaults))
            return repository.find_product(product_id)

    return _list_product


@pytest.fixture()
def stock_of():
    """Read a product's current quantity from the catalogue."""
    from catalogue.domain import catalogue
    from catalogue.product.product import Product

    def _stock_of(product_id):
        with catalogue.domain_context():
            return catalogue.repository_for(Product).find_product(product_id).quantity

    return _stock_of


@pytest.fixture()
def mug(list_product):
    """A listed product: 5 mugs at 25.00, managed by sam@example.com."""
    return list_product()
