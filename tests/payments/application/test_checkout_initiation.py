"""Application tests for starting a hosted checkout session."""

import pytest
from payments.checkout.checkout import Checkout
from payments.checkout.initiation import CreateCheckoutSession
from payments.gateway.port import LineItem
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from shared.errors import SessionCreationError


def _start_checkout(**overrides):
    defaults = {
        "product_id": "prod-1",
        "name": "Ceramic Mug",
        "description": "Hand-thrown",
        "image": "https://cdn.example.com/mug.jpg",
        "price": 25.0,
        "quantity": 1,
        "customer_name": "Alex Buyer",
        "customer_email": "alex@example.com",
        "client_domain": "http://shop.test/",
    }
    defaults.update(overrides)
    return current_domain.process(CreateCheckoutSession(**defaults), asynchronous=False)


def _recorded_checkouts():
    return current_domain.repository_for(Checkout)._dao.query.all().items


class TestCreateCheckoutSession:
    def test_returns_gateway_url(self, gateway):
        result = _start_checkout()
        assert result.url.startswith("https://checkout.fake.test/pay/")
        assert result.session_id in gateway.sessions

    def test_line_item_in_minor_units(self, gateway):
        _start_checkout(price=19.99, quantity=2)
        line_item = gateway.calls[-1]["line_item"]
        assert line_item == LineItem(
            name="Ceramic Mug",
            unit_amount=1999,
            quantity=2,
            currency="usd",
            description="Hand-thrown",
            image="https://cdn.example.com/mug.jpg",
        )

    def test_metadata_carries_product_and_customer(self, gateway):
        _start_checkout()
        call = gateway.calls[-1]
        assert call["metadata"] == {
            "productId": "prod-1",
            "customer_name": "Alex Buyer",
            "customer_email": "alex@example.com",
        }
        assert call["customer_email"] == "alex@example.com"

    def test_redirect_urls(self, gateway):
        _start_checkout()
        call = gateway.calls[-1]
        assert call["success_url"] == "http://shop.test/paymentSuccessful?session_id={CHECKOUT_SESSION_ID}"
        assert call["cancel_url"] == "http://shop.test/product/prod-1"

    def test_anonymous_customer(self, gateway):
        _start_checkout(customer_name="", customer_email=None)
        call = gateway.calls[-1]
        assert call["customer_email"] is None
        assert call["metadata"]["customer_email"] == ""

    def test_name_falls_back_to_product_id(self, gateway):
        _start_checkout(name="")
        assert gateway.calls[-1]["line_item"].name == "prod-1"

    def test_configured_currency(self, gateway):
        _start_checkout(currency="eur")
        assert gateway.calls[-1]["line_item"].currency == "eur"

    def test_session_is_open_until_paid(self, gateway):
        result = _start_checkout(price=25.0, quantity=1)
        session = gateway.retrieve_session(result.session_id)
        assert session.status == "open"
        assert session.is_complete is False
        assert session.amount_total == 2500

    def test_checkout_is_recorded(self, gateway):
        result = _start_checkout(price=12.5, quantity=3)
        [checkout] = _recorded_checkouts()
        assert checkout.session_id == result.session_id
        assert checkout.product_id == "prod-1"
        assert checkout.unit_amount == 1250
        assert checkout.quantity == 3
        assert checkout.amount_total == 3750
        assert checkout.url == result.url
        assert checkout.created_at is not None


class TestCheckoutValidation:
    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"product_id": None}, "productId"),
            ({"product_id": ""}, "productId"),
            ({"price": None}, "price"),
            ({"price": 0}, "price"),
            ({"price": -5}, "price"),
            ({"quantity": None}, "quantity"),
            ({"quantity": 0}, "quantity"),
        ],
    )
    def test_invalid_request_rejected_before_gateway(self, gateway, overrides, field):
        with pytest.raises(ValidationError) as exc:
            _start_checkout(**overrides)
        assert field in exc.value.messages
        assert gateway.calls == []
        assert _recorded_checkouts() == []

    def test_gateway_failure(self, gateway):
        gateway.configure(should_succeed=False, failure_reason="Card network down")
        with pytest.raises(SessionCreationError) as exc:
            _start_checkout()
        assert exc.value.status_code == 502
        assert exc.value.message == "Card network down"
        assert _recorded_checkouts() == []
