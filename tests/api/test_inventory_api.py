"""Tests for the stock-in / stock-out ledger endpoints."""

from decimal import Decimal

from httpx import AsyncClient

from src.core.entities.user import UserRole

CLERK = UserRole.STOCK_CONTROLLER


async def _stock_in(client, headers, product_id, quantity, date="2026-01-05T09:00:00"):
    return await client.post(
        "/api/inventory/stock-in",
        json={"productId": product_id, "quantity": quantity, "date": date},
        headers=headers,
    )


async def _stock_out(client, headers, product_id, quantity, date="2026-01-05T10:00:00"):
    return await client.post(
        "/api/inventory/stock-out",
        json={"productId": product_id, "quantity": quantity, "date": date},
        headers=headers,
    )


class TestStockIn:
    async def test_records_receipt(self, client: AsyncClient, seeded, auth_headers):
        response = await client.post(
            "/api/inventory/stock-in",
            json={
                "productId": seeded.product_id,
                "supplierId": seeded.supplier_id,
                "quantity": 30,
                "date": "2026-01-05T09:00:00",
                "notes": "Weekly delivery",
            },
            headers=auth_headers(CLERK),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["productId"] == seeded.product_id
        assert body["supplierId"] == seeded.supplier_id
        assert body["quantity"] == 30
        assert Decimal(body["purchasePrice"]) == Decimal("0.50")
        assert body["fiscalYear"] == 2026

    async def test_viewer_forbidden(self, client: AsyncClient, seeded, auth_headers):
        response = await _stock_in(
            client, auth_headers(UserRole.VIEWER), seeded.product_id, 5
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "UNAUTHORIZED"

    async def test_zero_quantity(self, client: AsyncClient, seeded, auth_headers):
        response = await _stock_in(client, auth_headers(CLERK), seeded.product_id, 0)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_unknown_product(self, client: AsyncClient, seeded, auth_headers):
        response = await _stock_in(client, auth_headers(CLERK), 9999, 5)

        assert response.status_code == 400
        assert response.json()["error_code"] == "REFERENCE_ERROR"

    async def test_malformed_body(self, client: AsyncClient, seeded, auth_headers):
        response = await client.post(
            "/api/inventory/stock-in",
            json={"quantity": "lots"},
            headers=auth_headers(CLERK),
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert "productId" in body["detail"]

    async def test_oversized_price_is_rejected(self, client: AsyncClient, seeded, auth_headers):
        response = await client.post(
            "/api/inventory/stock-in",
            json={"productId": seeded.product_id, "quantity": 1, "purchasePrice": "1e30"},
            headers=auth_headers(CLERK),
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert "purchasePrice" in body["detail"]

    async def test_negative_price(self, client: AsyncClient, seeded, auth_headers):
        response = await client.post(
            "/api/inventory/stock-in",
            json={"productId": seeded.product_id, "quantity": 1, "purchasePrice": "-1"},
            headers=auth_headers(CLERK),
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestStockOut:
    async def test_records_dispatch(self, client: AsyncClient, seeded, auth_headers):
        headers = auth_headers(CLERK)
        await _stock_in(client, headers, seeded.product_id, 50)

        response = await client.post(
            "/api/inventory/stock-out",
            json={
                "productId": seeded.product_id,
                "quantity": 10,
                "reason": "damage",
                "date": "2026-01-05T10:00:00",
            },
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["reason"] == "damage"
        assert Decimal(body["sellingPrice"]) == Decimal("1.00")

    async def test_insufficient_stock(self, client: AsyncClient, seeded, auth_headers):
        headers = auth_headers(CLERK)
        await _stock_in(client, headers, seeded.product_id, 15)

        response = await _stock_out(client, headers, seeded.product_id, 20)

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert body["hint"]
        assert body["path"] == "/api/inventory/stock-out"

    async def test_low_stock_publishes_alert(
        self, client: AsyncClient, seeded, auth_headers, mock_alerts
    ):
        headers = auth_headers(CLERK)
        await _stock_in(client, headers, seeded.product_id, 30)

        response = await _stock_out(client, headers, seeded.product_id, 15)

        assert response.status_code == 201
        alert = mock_alerts.publish.call_args[0][0]
        assert alert.current_stock == 15
        assert alert.text == "LOW STOCK ALERT: Cola 330ml is down to 15 can. Min level: 20"

    async def test_no_alert_above_minimum(
        self, client: AsyncClient, seeded, auth_headers, mock_alerts
    ):
        headers = auth_headers(CLERK)
        await _stock_in(client, headers, seeded.product_id, 50)

        await _stock_out(client, headers, seeded.product_id, 5)

        mock_alerts.publish.assert_not_called()

    async def test_viewer_forbidden(self, client: AsyncClient, seeded, auth_headers):
        response = await _stock_out(
            client, auth_headers(UserRole.VIEWER), seeded.product_id, 1
        )
        assert response.status_code == 403

    async def test_unknown_reason(self, client: AsyncClient, seeded, auth_headers):
        response = await client.post(
            "/api/inventory/stock-out",
            json={"productId": seeded.product_id, "quantity": 1, "reason": "theft"},
            headers=auth_headers(CLERK),
        )
        assert response.status_code == 422


class TestTransactions:
    async def test_feed_newest_first(self, client: AsyncClient, seeded, auth_headers):
        headers = auth_headers(CLERK)
        await _stock_in(client, headers, seeded.product_id, 30)
        await _stock_out(client, headers, seeded.product_id, 5)

        response = await client.get(
            "/api/inventory/transactions", headers=auth_headers(UserRole.VIEWER)
        )

        assert response.status_code == 200
        feed = response.json()
        assert [m["type"] for m in feed] == ["out", "in"]
        assert feed[0]["productName"] == "Cola 330ml"
        assert feed[0]["userName"] == "Stock Controller"
        assert feed[0]["details"] == "sale"
        assert feed[1]["details"] == "Purchase"

    async def test_type_filter(self, client: AsyncClient, seeded, auth_headers):
        headers = auth_headers(CLERK)
        await _stock_in(client, headers, seeded.product_id, 30)
        await _stock_out(client, headers, seeded.product_id, 5)

        response = await client.get(
            "/api/inventory/transactions", params={"type": "in"}, headers=headers
        )

        assert [m["type"] for m in response.json()] == ["in"]

    async def test_limit_bounds(self, client: AsyncClient, seeded, auth_headers):
        response = await client.get(
            "/api/inventory/transactions",
            params={"limit": 0},
            headers=auth_headers(CLERK),
        )
        assert response.status_code == 422


class TestProductMovements:
    async def test_history_with_stock(self, client: AsyncClient, seeded, auth_headers):
        headers = auth_headers(CLERK)
        await _stock_in(client, headers, seeded.product_id, 30)
        await _stock_out(client, headers, seeded.product_id, 12)

        response = await client.get(
            f"/api/inventory/products/{seeded.product_id}/movements", headers=headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["currentStock"] == 18
        assert body["isLowStock"] is True
        assert body["product"]["currentStock"] == 18
        assert len(body["movements"]) == 2

    async def test_unknown_product(self, client: AsyncClient, seeded, auth_headers):
        response = await client.get(
            "/api/inventory/products/9999/movements", headers=auth_headers(CLERK)
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"
