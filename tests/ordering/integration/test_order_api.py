"""Integration tests for payment confirmation and order endpoints via TestClient."""

import pytest
from ordering.order.order import Order
from ordering.order.queries import list_orders
from payments.gateway.port import CheckoutSession
from protean.utils.globals import current_domain


@pytest.fixture()
def paid_session(gateway, mug):
    gateway.add_session(
        CheckoutSession(
            session_id="cs_paid",
            status="complete",
            payment_intent_id="pi_1",
            amount_total=2500,
            metadata={"productId": str(mug.id), "customer_name": "Alex Buyer", "customer_email": "alex@example.com"},
        )
    )
    return "cs_paid"


class TestPaymentConfirmationAPI:
    def test_first_confirmation_returns_201(self, client, paid_session, mug, stock_of):
        response = client.post("/payment-confirmations", json={"sessionId": paid_session})
        assert response.status_code == 201
        body = response.json()
        assert body["transactionId"] == "pi_1"
        assert body["orderId"]
        assert stock_of(str(mug.id)) == 4

    def test_replay_returns_200_with_same_order(self, client, paid_session, mug, stock_of):
        first = client.post("/payment-confirmations", json={"sessionId": paid_session}).json()
        response = client.post("/payment-confirmations", json={"sessionId": paid_session})
        assert response.status_code == 200
        assert response.json() == first
        assert stock_of(str(mug.id)) == 4

    def test_unpaid_session_returns_409(self, client, gateway, mug):
        gateway.add_session(
            CheckoutSession(session_id="cs_open", status="open", amount_total=2500, metadata={"productId": str(mug.id)})
        )
        response = client.post("/payment-confirmations", json={"sessionId": "cs_open"})
        assert response.status_code == 409
        assert response.json()["message"] == "Payment has not been completed"
        assert list_orders() == []

    def test_unknown_session_returns_404(self, client):
        response = client.post("/payment-confirmations", json={"sessionId": "cs_unknown"})
        assert response.status_code == 404

    def test_gateway_outage_returns_502(self, client, gateway, paid_session):
        gateway.configure(should_succeed=False)
        response = client.post("/payment-confirmations", json={"sessionId": paid_session})
        assert response.status_code == 502
        assert response.json()["message"] == "Gateway unavailable"

    def test_missing_product_returns_404(self, client, gateway):
        gateway.add_session(
            CheckoutSession(
                session_id="cs_gone",
                status="complete",
                payment_intent_id="pi_gone",
                amount_total=2500,
                metadata={"productId": "no-such-product"},
            )
        )
        response = client.post("/payment-confirmations", json={"sessionId": "cs_gone"})
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_missing_session_id_returns_400(self, client):
        response = client.post("/payment-confirmations", json={})
        assert response.status_code == 400
        assert "sessionId" in response.json()["errors"]

    def test_blank_session_id_returns_400(self, client):
        response = client.post("/payment-confirmations", json={"sessionId": "   "})
        assert response.status_code == 400

    def test_confirmation_is_public(self, client, paid_session):
        response = client.post("/payment-confirmations", json={"sessionId": paid_session})
        assert response.status_code == 201


class TestListOrdersAPI:
    def test_requires_token(self, client):
        assert client.get("/orders").status_code == 401

    def test_list_orders(self, client, paid_session, customer_headers, mug):
        client.post("/payment-confirmations", json={"sessionId": paid_session})

        response = client.get("/orders", headers=customer_headers)

        assert response.status_code == 200
        [order] = response.json()
        assert order["_id"]
        assert order["transactionId"] == "pi_1"
        assert order["productId"] == str(mug.id)
        assert order["productName"] == "Ceramic Mug"
        assert order["price"] == 25.0
        assert order["quantity"] == 1
        assert order["status"] == "pending"
        assert order["manager"]["email"] == "sam@example.com"
        assert order["customerEmail"] == "alex@example.com"
        assert order["createdAt"]

    def test_filter_by_customer_and_manager(self, client, paid_session, customer_headers):
        client.post("/payment-confirmations", json={"sessionId": paid_session})

        mine = client.get("/orders", params={"customerEmail": "alex@example.com"}, headers=customer_headers)
        theirs = client.get("/orders", params={"customerEmail": "jo@example.com"}, headers=customer_headers)
        managed = client.get("/orders", params={"managerEmail": "sam@example.com"}, headers=customer_headers)

        assert len(mine.json()) == 1
        assert theirs.json() == []
        assert len(managed.json()) == 1


class TestDeleteOrderAPI:
    def test_delete_order(self, client, paid_session, manager_headers):
        order_id = client.post("/payment-confirmations", json={"sessionId": paid_session}).json()["orderId"]

        response = client.delete(f"/orders/{order_id}", headers=manager_headers)

        assert response.status_code == 200
        assert response.json() == {"acknowledged": True, "deletedCount": 1}
        assert current_domain.repository_for(Order).find_order(order_id) is None

    def test_delete_missing_order_returns_404(self, client, manager_headers):
        response = client.delete("/orders/missing", headers=manager_headers)
        assert response.status_code == 404

    def test_delete_requires_token(self, client):
        assert client.delete("/orders/anything").status_code == 401
