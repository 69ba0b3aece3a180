"""Tests for the Order aggregate."""

import pytest
from catalogue.product.product import Manager, Product
from ordering.order.order import ORDER_QUANTITY, Order, OrderStatus
from protean.exceptions import ValidationError


@pytest.fixture()
def product():
    return Product(
        id="prod-1",
        name="Ceramic Mug",
        category="Kitchen",
        price=25.0,
        quantity=5,
        manager=Manager(name="Sam Seller", email="sam@example.com"),
    )


class TestPlaceOrder:
    def test_place_snapshots_product(self, product):
        order = Order.place(
            product=product,
            transaction_id="pi_1",
            amount_total=2500,
            customer_email="alex@example.com",
            customer_name="Alex Buyer",
        )
        assert order.id is not None
        assert order.product_id == "prod-1"
        assert order.transaction_id == "pi_1"
        assert order.product_name == "Ceramic Mug"
        assert order.category == "Kitchen"
        assert order.manager.email == "sam@example.com"
        assert order.manager.name == "Sam Seller"
        assert order.customer_email == "alex@example.com"
        assert order.customer_name == "Alex Buyer"

    def test_new_order_is_pending_single_unit(self, product):
        order = Order.place(product=product, transaction_id="pi_1", amount_total=2500)
        assert order.status == OrderStatus.PENDING.value
        assert order.quantity == ORDER_QUANTITY == 1
        assert order.created_at is not None

    def test_price_converted_from_minor_units(self, product):
        assert Order.place(product=product, transaction_id="pi_1", amount_total=2500).price == 25.0
        assert Order.place(product=product, transaction_id="pi_2", amount_total=1999).price == 19.99
        assert Order.place(product=product, transaction_id="pi_3", amount_total=0).price == 0

    def test_price_comes_from_charge_not_listing(self, product):
        order = Order.place(product=product, transaction_id="pi_1", amount_total=1000)
        assert order.price == 10.0

    def test_snapshot_survives_product_changes(self, product):
        order = Order.place(product=product, transaction_id="pi_1", amount_total=2500)
        product.name = "Renamed"
        assert order.product_name == "Ceramic Mug"


class TestOrderInvariants:
    def test_transaction_id_required(self, product):
        with pytest.raises(ValidationError) as exc:
            Order.place(product=product, transaction_id="", amount_total=2500)
        assert "transaction_id" in exc.value.messages

    def test_negative_amount_rejected(self, product):
        with pytest.raises(ValidationError) as exc:
            Order.place(product=product, transaction_id="pi_1", amount_total=-1)
        assert "price" in exc.value.messages

    def test_unknown_status_rejected(self, product):
        order = Order.place(product=product, transaction_id="pi_1", amount_total=2500)
        with pytest.raises(ValidationError):
            order.status = "shipped"
