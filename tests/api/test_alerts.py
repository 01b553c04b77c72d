"""API tests for the dashboard alert endpoints."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from canteiro.api.dependencies import get_list_expiring_documents_use_case
from canteiro.api.main import app
from canteiro.application.use_cases import ExpiringDocumentsResult
from canteiro.core.entities import ExpiringDocument, TypedDocument
from canteiro.core.services import get_alert_status


@pytest.fixture
def mock_use_case():
    """Create mock expiring documents use case."""
    doc = TypedDocument(
        id=5, parent_id=3, kind="vehicle", doc_type="crlv", expires_at=date(2024, 5, 20)
    )
    result = ExpiringDocumentsResult(
        documents=[
            ExpiringDocument(
                document=doc,
                category="Veículo",
                parent_name="BRA1B23 - Strada",
                status=get_alert_status(doc.expires_at, today=date(2024, 6, 1)),
                days_left=-12,
            )
        ]
    )
    result.counts["expired"] = 1

    uc = AsyncMock()
    uc.execute.return_value = result
    return uc


@pytest.fixture
async def alerts_client(client: AsyncClient, mock_use_case):
    app.dependency_overrides[get_list_expiring_documents_use_case] = lambda: mock_use_case
    yield client
    app.dependency_overrides.pop(get_list_expiring_documents_use_case, None)


class TestExpiringDocuments:
    async def test_lists_rows(self, alerts_client: AsyncClient, admin_headers, mock_use_case):
        response = await alerts_client.get(
            "/api/alerts/expiring-documents",
            params={"within_days": 30, "today": "2024-06-01"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["counts"]["expired"] == 1
        row = body["documents"][0]
        assert row["category"] == "Veículo"
        assert row["parent_name"] == "BRA1B23 - Strada"
        assert row["status"]["severity"] == "expired"
        assert row["document"]["alert"]["severity"] == "expired"
        assert row["days_left"] == -12
        mock_use_case.execute.assert_awaited_once_with(within_days=30, today=date(2024, 6, 1))

    async def test_requires_dashboard(self, alerts_client: AsyncClient):
        response = await alerts_client.get(
            "/api/alerts/expiring-documents", headers={"X-User-Id": "u1", "X-User-Permissions": "obras"}
        )
        assert response.status_code == 403

    async def test_sub_user_with_dashboard(self, alerts_client: AsyncClient):
        response = await alerts_client.get(
            "/api/alerts/expiring-documents",
            headers={"X-User-Id": "u1", "X-User-Permissions": "dashboard"},
        )
        assert response.status_code == 200

    async def test_negative_window_rejected(self, alerts_client: AsyncClient, admin_headers):
        response = await alerts_client.get(
            "/api/alerts/expiring-documents", params={"within_days": -1}, headers=admin_headers
        )
        assert response.status_code == 422
