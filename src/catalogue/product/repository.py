"""Product persistence.

Products are kept by protean's configured provider (the memory provider in
development and tests) until a MongoDB database is bound through
``shared.mongo.bind_database``; from then on they live in the ``products``
collection. Both paths decrement stock with a guarded relative update, so
quantity never goes below zero.
"""

import threading

import structlog
from protean.exceptions import ValidationError
from pymongo import ASCENDING

from catalogue.domain import catalogue
from catalogue.product.product import Manager, Product
from shared import mongo
from shared.errors import StorageError

logger = structlog.get_logger(__name__)

COLLECTION = "products"


@catalogue.repository(part_of=Product)
class ProductRepository:
    """Repository for the Product aggregate.

    Reads and stock updates run outside any active Unit of Work, so other
    domains can call them from inside their own command handlers.
    """

    _stock_lock = threading.Lock()

    def setup_indexes(self) -> None:
        collection = mongo.collection(COLLECTION)
        if collection is not None:
            collection.create_index([("manager.email", ASCENDING)])

    def drop_collection(self) -> None:
        collection = mongo.collection(COLLECTION)
        if collection is not None:
            collection.drop()

    def store(self, product: Product) -> str:
        """Persist a new listing and return its id."""
        collection = mongo.collection(COLLECTION)
        if collection is None:
            self.add(product)
        else:
            collection.insert_one(_to_document(product))
        return str(product.id)

    def find_product(self, product_id: str) -> Product | None:
        if not product_id:
            return None
        collection = mongo.collection(COLLECTION)
        if collection is None:
            return self._dao.outside_uow().query.filter(id=product_id).all().first
        document = collection.find_one(mongo.id_filter(product_id))
        return _from_document(document) if document else None

    def listing(self, manager_email: str | None = None) -> list[Product]:
        """Every product, or only those owned by ``manager_email``."""
        collection = mongo.collection(COLLECTION)
        if collection is None:
            query = self._dao.outside_uow().query
            if manager_email is not None:
                query = query.filter(manager_email=manager_email)
            return query.all().items

        criteria = {} if manager_email is None else {"manager.email": manager_email}
        return [_from_document(document) for document in collection.find(criteria)]

    def decrement_quantity(self, product_id: str, by: int = 1) -> bool:
        """Take ``by`` units off the stock. False when the stock cannot cover it."""
        collection = mongo.collection(COLLECTION)
        if collection is not None:
            # The filter carries the guard so the check and the $inc are one write.
            result = collection.update_one(
                {**mongo.id_filter(product_id), "quantity": {"$gte": by}},
                {"$inc": {"quantity": -by}},
            )
            return result.modified_count == 1

        with self._stock_lock:
            dao = self._dao.outside_uow()
            product = dao.query.filter(id=product_id).all().first
            if product is None or product.quantity < by:
                return False
            product.quantity = product.quantity - by
            dao.save(product)
        return True


def _to_document(product: Product) -> dict:
    return {
        "_id": str(product.id),
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "image": product.image,
        "price": product.price,
        "quantity": product.quantity,
        "manager": {"name": product.manager.name, "email": product.manager.email},
    }


def _from_document(document: dict) -> Product:
    manager = document.get("manager")
    try:
        if isinstance(manager, dict):
            manager = Manager(name=manager.get("name") or "", email=manager.get("email"))
        return Product(
            id=str(document["_id"]),
            name=document.get("name"),
            description=document.get("description") or "",
            category=document.get("category") or "",
            image=document.get("image"),
            price=document.get("price"),
            quantity=document.get("quantity"),
            manager=manager if isinstance(manager, Manager) else None,
        )
    except ValidationError as exc:
        logger.error("Stored product does not load", product_id=str(document["_id"]), errors=exc.messages)
        raise StorageError("Stored product is malformed", {"product_id": [str(document["_id"])]}) from exc
