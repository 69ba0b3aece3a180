"""Order persistence.

Orders are kept by protean's configured provider until a MongoDB database is
bound; from then on they live in the ``orders`` collection, where a unique
index on ``transaction_id`` enforces one order per payment. The provider path
holds a lock across the duplicate check and the write to get the same
guarantee in-process.
"""

import threading

import structlog
from protean.exceptions import ValidationError
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from ordering.domain import ordering
from ordering.order.order import ManagerSnapshot, Order, OrderStatus
from shared import mongo
from shared.errors import ConflictError, StorageError

logger = structlog.get_logger(__name__)

COLLECTION = "orders"


@ordering.repository(part_of=Order)
class OrderRepository:
    """Repository for the Order aggregate.

    Every method commits on its own, outside the handler's Unit of Work: an
    inserted order must be visible to a concurrent callback at once.
    """

    _insert_lock = threading.Lock()

    def setup_indexes(self) -> None:
        collection = mongo.collection(COLLECTION)
        if collection is not None:
            collection.create_index([("transaction_id", ASCENDING)], unique=True)
            collection.create_index([("customer_email", ASCENDING)])
            collection.create_index([("manager.email", ASCENDING)])

    def drop_collection(self) -> None:
        collection = mongo.collection(COLLECTION)
        if collection is not None:
            collection.drop()

    def insert_unique(self, order: Order) -> str:
        """Persist ``order`` unless one already exists for its transaction.

        Raises ConflictError on a duplicate transaction id.
        """
        collection = mongo.collection(COLLECTION)
        if collection is not None:
            try:
                collection.insert_one(_to_document(order))
            except DuplicateKeyError as exc:
                raise _duplicate(order) from exc
            return str(order.id)

        with self._insert_lock:
            dao = self._dao.outside_uow()
            if dao.query.filter(transaction_id=order.transaction_id).all().first is not None:
                raise _duplicate(order)
            dao.save(order)
        return str(order.id)

    def find_order(self, order_id: str) -> Order | None:
        collection = mongo.collection(COLLECTION)
        if collection is None:
            return self._dao.outside_uow().query.filter(id=order_id).all().first
        document = collection.find_one(mongo.id_filter(order_id))
        return _from_document(document) if document else None

    def find_by_transaction_id(self, transaction_id: str) -> Order | None:
        if not transaction_id:
            return None
        collection = mongo.collection(COLLECTION)
        if collection is None:
            return self._dao.outside_uow().query.filter(transaction_id=transaction_id).all().first
        document = collection.find_one({"transaction_id": transaction_id})
        return _from_document(document) if document else None

    def listing(self, customer_email: str | None = None, manager_email: str | None = None) -> list[Order]:
        collection = mongo.collection(COLLECTION)
        if collection is None:
            query = self._dao.outside_uow().query
            if customer_email is not None:
                query = query.filter(customer_email=customer_email)
            if manager_email is not None:
                query = query.filter(manager_email=manager_email)
            return query.all().items

        criteria = {}
        if customer_email is not None:
            criteria["customer_email"] = customer_email
        if manager_email is not None:
            criteria["manager.email"] = manager_email
        return [_from_document(document) for document in collection.find(criteria)]

    def remove(self, order_id: str) -> bool:
        collection = mongo.collection(COLLECTION)
        if collection is not None:
            return collection.delete_one(mongo.id_filter(order_id)).deleted_count == 1

        dao = self._dao.outside_uow()
        order = dao.query.filter(id=order_id).all().first
        if order is None:
            return False
        dao.delete(order)
        return True


def _duplicate(order: Order) -> ConflictError:
    return ConflictError(
        "Order already exists for transaction",
        {"transaction_id": [f"Duplicate transaction id '{order.transaction_id}'"]},
    )


def _to_document(order: Order) -> dict:
    return {
        "_id": str(order.id),
        "product_id": str(order.product_id),
        "transaction_id": order.transaction_id,
        "customer_email": order.customer_email,
        "customer_name": order.customer_name,
        "status": order.status,
        "manager": {"name": order.manager.name, "email": order.manager.email},
        "product_name": order.product_name,
        "category": order.category,
        "quantity": order.quantity,
        "price": order.price,
        "created_at": order.created_at,
    }


def _from_document(document: dict) -> Order:
    manager = document.get("manager") or {}
    try:
        return Order(
            id=str(document["_id"]),
            product_id=str(document.get("product_id") or ""),
            transaction_id=document.get("transaction_id"),
            customer_email=document.get("customer_email") or "",
            customer_name=document.get("customer_name") or "",
            status=document.get("status") or OrderStatus.PENDING.value,
            manager=ManagerSnapshot(name=manager.get("name") or "", email=manager.get("email")),
            product_name=document.get("product_name"),
            category=document.get("category") or "",
            quantity=document.get("quantity"),
            price=document.get("price"),
            created_at=document.get("created_at"),
        )
    except ValidationError as exc:
        logger.error("Stored order does not load", order_id=str(document["_id"]), errors=exc.messages)
        raise StorageError("Stored order is malformed", {"order_id": [str(document["_id"])]}) from exc
