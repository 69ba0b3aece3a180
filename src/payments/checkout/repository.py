"""Checkout persistence: protean's provider, or the ``checkouts`` collection."""

from pymongo import ASCENDING

from payments.checkout.checkout import Checkout
from payments.domain import payments
from shared import mongo

COLLECTION = "checkouts"


@payments.repository(part_of=Checkout)
class CheckoutRepository:
    def setup_indexes(self) -> None:
        collection = mongo.collection(COLLECTION)
        if collection is not None:
            collection.create_index([("session_id", ASCENDING)], unique=True)

    def drop_collection(self) -> None:
        collection = mongo.collection(COLLECTION)
        if collection is not None:
            collection.drop()

    def record(self, checkout: Checkout) -> None:
        collection = mongo.collection(COLLECTION)
        if collection is None:
            self.add(checkout)
            return
        collection.insert_one(
            {
                "_id": str(checkout.id),
                "session_id": checkout.session_id,
                "product_id": str(checkout.product_id),
                "product_name": checkout.product_name,
                "unit_amount": checkout.unit_amount,
                "quantity": checkout.quantity,
                "currency": checkout.currency,
                "customer_name": checkout.customer_name,
                "customer_email": checkout.customer_email,
                "url": checkout.url,
                "created_at": checkout.created_at,
            }
        )
