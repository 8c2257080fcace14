"""Tests for order, customer and dashboard API endpoints."""
import pytest


class TestOrderAPI:

    def test_list_orders(self, client, auth):
        response = client.get("/api/v1/orders", auth=auth)
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == ["ord-102"]

    def test_filter_orders_by_status(self, client, auth):
        assert client.get("/api/v1/orders?status=Delivered", auth=auth).json() == []

    def test_patch_order_status(self, client, auth):
        response = client.patch(
            "/api/v1/orders/ord-102",
            json={"status": "Delivered", "payment_status": "Paid"},
            auth=auth
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Delivered"
        assert data["payment_status"] == "Paid"
        assert data["items"][0]["quantity"] == 2

    def test_patch_rejects_unknown_status(self, client, auth):
        response = client.patch("/api/v1/orders/ord-102", json={"status": "Lost"}, auth=auth)
        assert response.status_code == 422


class TestCustomerAPI:
    """Tests for customers and baki collection."""

    def test_list_customers_with_due(self, client, auth):
        response = client.get("/api/v1/customers?with_due=true", auth=auth)
        assert [c["id"] for c in response.json()] == ["c2"]

    def test_receive_payment(self, client, auth):
        response = client.post("/api/v1/customers/c2/payments", json={"amount": 40}, auth=auth)
        assert response.status_code == 200
        assert response.json()["current_due"] == 500

    def test_payment_must_be_positive(self, client, auth):
        response = client.post("/api/v1/customers/c2/payments", json={"amount": 0}, auth=auth)
        assert response.status_code == 422

    def test_customer_orders(self, client, auth):
        response = client.get("/api/v1/customers/c2/orders", auth=auth)
        assert [o["id"] for o in response.json()] == ["ord-102"]

    def test_unknown_customer_orders_is_404(self, client, auth):
        assert client.get("/api/v1/customers/c404/orders", auth=auth).status_code == 404

    def test_update_customer(self, client, auth):
        response = client.put("/api/v1/customers/c1", json={"address": "Gulshan, Dhaka"}, auth=auth)
        assert response.json()["address"] == "Gulshan, Dhaka"


class TestDashboardAPI:

    def test_summary(self, client, auth):
        response = client.get("/api/v1/dashboard/summary", auth=auth)
        assert response.status_code == 200
        data = response.json()
        assert data["total_dues"] == 540
        assert data["low_stock_count"] == 1
        assert data["low_stock_items"][0]["product_id"] == "p2"

    def test_analytics(self, client, auth):
        data = client.get("/api/v1/dashboard/analytics", auth=auth).json()
        assert data["total_revenue"] == 1640
        assert data["gross_margin"] == pytest.approx((1640 - 1560) / 1640 * 100)

    def test_sales_series(self, client, auth):
        data = client.get("/api/v1/dashboard/sales", auth=auth).json()
        assert data == [{"date": "2025-01-15", "amount": 1640.0}]
