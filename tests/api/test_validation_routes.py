"""API tests for the validation endpoints."""

from httpx import AsyncClient


class TestValidationEndpoints:
    async def test_tax_id(self, client: AsyncClient):
        response = await client.get(
            "/api/validation/tax-id", params={"value": "11222333000181"}, headers={"X-User-Id": "u1"}
        )

        assert response.status_code == 200
        assert response.json() == {"valid": True, "formatted": "11.222.333/0001-81"}

    async def test_tax_id_invalid(self, client: AsyncClient):
        response = await client.get(
            "/api/validation/tax-id", params={"value": "11111111111111"}, headers={"X-User-Id": "u1"}
        )

        assert response.json()["valid"] is False

    async def test_plate(self, client: AsyncClient):
        response = await client.get(
            "/api/validation/plate", params={"value": "bra-1b23"}, headers={"X-User-Id": "u1"}
        )

        assert response.json() == {"valid": True, "normalized": "BRA1B23"}

    async def test_alert_status(self, client: AsyncClient):
        response = await client.get(
            "/api/validation/alert-status",
            params={"date": "2024-06-30", "today": "2024-06-01"},
            headers={"X-User-Id": "u1"},
        )

        body = response.json()
        assert body["severity"] == "warning"
        assert body["label"] == "ATENÇÃO"

    async def test_alert_status_unreadable_date(self, client: AsyncClient):
        response = await client.get(
            "/api/validation/alert-status", params={"date": "amanhã"}, headers={"X-User-Id": "u1"}
        )

        assert response.json()["severity"] == "neutral"

    async def test_anonymous_is_forbidden(self, client: AsyncClient):
        response = await client.get("/api/validation/plate", params={"value": "BRA1B23"})

        assert response.status_code == 403
