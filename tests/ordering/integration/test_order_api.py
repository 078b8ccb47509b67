"""Integration tests for Order API endpoints via TestClient."""

import pytest
from catalogue.product.product import MAX_QUANTITY, Product
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api.routes import order_router
from ordering.order.order import Order
from protean.utils.globals import current_domain
from shared.api import register_domain_context, register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_domain_context(app)
    register_exception_handlers(app)
    app.include_router(order_router)
    return TestClient(app)


def _order_payload(customer_id, *lines, username="jane.doe", description="Leave at the front desk"):
    return {
        "username": username,
        "customer_id": str(customer_id),
        "description": description,
        "items": [{"product_id": str(product_id), "quantity": quantity} for product_id, quantity in lines],
    }


def _stock(product):
    return current_domain.repository_for(Product).get_product(product.id).stock_quantity


class TestCreateOrderEndpoint:
    def test_create_order(self, client, user, make_product, auth_headers):
        mouse = make_product(price=24.99, stock_quantity=10)

        response = client.post("/api/orders", json=_order_payload(user.id, (mouse.id, 2)), headers=auth_headers(user))

        assert response.status_code == 201
        data = response.json()
        assert data["customer_id"] == str(user.id)
        assert data["total_amount"] == 49.98
        assert data["status"] == "Pending"
        assert data["item_count"] == 1

        assert _stock(mouse) == 8
        assert current_domain.repository_for(Order).get_by_guid(data["order_guid"]).username == "jane.doe"

    def test_insufficient_stock(self, client, user, make_product, auth_headers):
        mouse = make_product(name="Wireless Mouse", stock_quantity=1)

        response = client.post("/api/orders", json=_order_payload(user.id, (mouse.id, 2)), headers=auth_headers(user))

        assert response.status_code == 400
        assert response.json() == {
            "error": {"quantity": ["Not enough stock for product Wireless Mouse. Requested: 2, Available: 1"]}
        }
        assert _stock(mouse) == 1

    def test_unknown_product(self, client, user, auth_headers):
        response = client.post(
            "/api/orders", json=_order_payload(user.id, ("no-such-product", 1)), headers=auth_headers(user)
        )
        assert response.status_code == 404

    def test_unknown_customer_for_admin(self, client, admin, make_product, auth_headers):
        mouse = make_product()
        response = client.post(
            "/api/orders", json=_order_payload("no-such-customer", (mouse.id, 1)), headers=auth_headers(admin)
        )
        assert response.status_code == 404

    def test_no_items(self, client, user, auth_headers):
        response = client.post("/api/orders", json=_order_payload(user.id), headers=auth_headers(user))
        assert response.status_code == 400

    def test_missing_customer(self, client, user, make_product, auth_headers):
        mouse = make_product()
        payload = _order_payload("", (mouse.id, 1))
        response = client.post("/api/orders", json=payload, headers=auth_headers(user))
        assert response.status_code == 400

    @pytest.mark.parametrize("quantity", [0, MAX_QUANTITY + 1, 10**20], ids=["zero", "past_int32", "huge"])
    def test_out_of_range_quantity_line(self, client, user, make_product, auth_headers, quantity):
        mouse = make_product()
        response = client.post(
            "/api/orders", json=_order_payload(user.id, (mouse.id, quantity)), headers=auth_headers(user)
        )
        assert response.status_code == 400
        assert _stock(mouse) == 10

    def test_ordering_for_someone_else_forbidden(self, client, user, make_user, make_product, auth_headers):
        other = make_user(name="John Roe", email="john@example.com")
        mouse = make_product()
        response = client.post("/api/orders", json=_order_payload(other.id, (mouse.id, 1)), headers=auth_headers(user))
        assert response.status_code == 403

    def test_admin_orders_on_behalf_of_customer(self, client, user, admin, make_product, auth_headers):
        mouse = make_product()
        response = client.post("/api/orders", json=_order_payload(user.id, (mouse.id, 1)), headers=auth_headers(admin))
        assert response.status_code == 201

    def test_requires_token(self, client, user, make_product):
        mouse = make_product()
        assert client.post("/api/orders", json=_order_payload(user.id, (mouse.id, 1))).status_code == 401


class TestGetOrderEndpoints:
    def _place(self, client, user, product, auth_headers, quantity=1):
        response = client.post(
            "/api/orders", json=_order_payload(user.id, (product.id, quantity)), headers=auth_headers(user)
        )
        assert response.status_code == 201
        return response.json()["order_guid"]

    def test_get_order(self, client, user, make_product, auth_headers):
        mouse = make_product(name="Wireless Mouse", price=24.99)
        guid = self._place(client, user, mouse, auth_headers, quantity=3)

        response = client.get(f"/api/orders/{guid}", headers=auth_headers(user))

        assert response.status_code == 200
        data = response.json()
        assert data["order_guid"] == guid
        assert data["description"] == "Leave at the front desk"
        assert data["items"][0]["product_name"] == "Wireless Mouse"
        assert data["items"][0]["line_total"] == 74.97
        assert data["total_amount"] == 74.97

    def test_get_unknown_order(self, client, user, auth_headers):
        response = client.get("/api/orders/00000000-0000-0000-0000-000000000000", headers=auth_headers(user))
        assert response.status_code == 404

    def test_malformed_guid(self, client, user, auth_headers):
        response = client.get("/api/orders/not-a-guid", headers=auth_headers(user))
        assert response.status_code == 400

    def test_other_customers_order_forbidden(self, client, user, make_user, make_product, auth_headers):
        other = make_user(name="John Roe", email="john@example.com")
        guid = self._place(client, user, make_product(), auth_headers)

        response = client.get(f"/api/orders/{guid}", headers=auth_headers(other))
        assert response.status_code == 403

    def test_customer_orders(self, client, user, make_product, auth_headers):
        mouse = make_product(stock_quantity=10)
        first = self._place(client, user, mouse, auth_headers)
        second = self._place(client, user, mouse, auth_headers)

        response = client.get(f"/api/orders/customer/{user.id}", headers=auth_headers(user))

        assert response.status_code == 200
        assert {order["order_guid"] for order in response.json()} == {first, second}

    def test_customer_orders_empty(self, client, user, auth_headers):
        response = client.get(f"/api/orders/customer/{user.id}", headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_customer_orders_for_admin(self, client, admin, auth_headers):
        response = client.get("/api/orders/customer/no-such-customer", headers=auth_headers(admin))
        assert response.status_code == 404

    def test_other_customers_orders_forbidden(self, client, user, make_user, auth_headers):
        other = make_user(name="John Roe", email="john@example.com")
        response = client.get(f"/api/orders/customer/{other.id}", headers=auth_headers(user))
        assert response.status_code == 403
