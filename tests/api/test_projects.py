"""API tests for project endpoints."""

from httpx import AsyncClient

from canteiro.core.entities import UNSET, ProjectHistoryEntry, TypedDocument
from canteiro.core.exceptions import InvalidTaxIdError, RecordNotFoundError


class TestProjectAccess:
    """Capability checks on the projects router."""

    async def test_anonymous_is_forbidden(self, client: AsyncClient):
        response = await client.get("/api/projects")

        assert response.status_code == 403
        assert response.json()["error_code"] == "PERMISSION_DENIED"

    async def test_sub_user_without_capability(self, client: AsyncClient):
        response = await client.get(
            "/api/projects",
            headers={"X-User-Id": "u1", "X-User-Role": "sub_user", "X-User-Permissions": "dashboard"},
        )
        assert response.status_code == 403

    async def test_sub_user_with_capability(self, client: AsyncClient):
        response = await client.get(
            "/api/projects",
            headers={"X-User-Id": "u1", "X-User-Permissions": "dashboard, obras"},
        )
        assert response.status_code == 200

    async def test_unknown_role_is_treated_as_sub_user(self, client: AsyncClient):
        response = await client.get(
            "/api/projects", headers={"X-User-Id": "u1", "X-User-Role": "root"}
        )
        assert response.status_code == 403


class TestProjectCrud:
    async def test_list(self, client: AsyncClient, admin_headers, project_service):
        response = await client.get("/api/projects?limit=10", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data[0]["name"] == "Residencial Aurora"
        assert data[0]["status"] == "ativa"
        assert data[0]["contract_value_formatted"] == "R$ 250.000,00"
        project_service.list_all.assert_awaited_once_with(limit=10, offset=0)

    async def test_create_with_contracts(self, client: AsyncClient, admin_headers, project_service):
        response = await client.post(
            "/api/projects",
            json={
                "name": "Residencial Aurora",
                "tax_id": "11222333000181",
                "state": "PR",
                "contracts": [
                    {"description": "Contrato principal", "expires_at": "2025-01-31", "value": 1000},
                ],
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        args = project_service.create.await_args
        assert args.args[0].name == "Residencial Aurora"
        [contract] = args.kwargs["documents"]
        assert contract.doc_type == "contrato"
        assert contract.file is None
        assert contract.description == "Contrato principal"
        assert contract.value == 1000

    async def test_create_requires_name(self, client: AsyncClient, admin_headers):
        response = await client.post("/api/projects", json={"city": "X"}, headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_create_invalid_tax_id(self, client: AsyncClient, admin_headers, project_service):
        project_service.create.side_effect = InvalidTaxIdError("11.222.333/0001-82")

        response = await client.post(
            "/api/projects", json={"name": "Obra", "tax_id": "11.222.333/0001-82"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_TAX_ID"

    async def test_get_missing(self, client: AsyncClient, admin_headers, project_service):
        project_service.get.side_effect = RecordNotFoundError("project", 99)

        response = await client.get("/api/projects/99", headers=admin_headers)

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "RECORD_NOT_FOUND"
        assert body["path"] == "/api/projects/99"

    async def test_update_passes_acting_user(self, client: AsyncClient, admin_headers, project_service):
        response = await client.put(
            "/api/projects/1",
            json={"name": "Residencial Aurora II", "city": "Curitiba", "state": "PR"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        args = project_service.update.await_args
        assert args.args[0].id == 1
        assert args.args[0].name == "Residencial Aurora II"
        assert args.kwargs["user"].user_id == "admin-1"

    async def test_delete(self, client: AsyncClient, admin_headers, project_service):
        response = await client.delete("/api/projects/1", headers=admin_headers)

        assert response.status_code == 204
        project_service.delete.assert_awaited_once_with(1)

    async def test_history(self, client: AsyncClient, admin_headers, project_service):
        project_service.history.return_value = [
            ProjectHistoryEntry(id=3, project_id=1, user_id="admin-1", field="city", old_value="A", new_value="B")
        ]

        response = await client.get("/api/projects/1/history", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()[0]["field"] == "city"


class TestProjectContracts:
    async def test_contract_without_file(self, client: AsyncClient, admin_headers, project_service):
        project_service.documents.save_contract.return_value = TypedDocument(
            id=20,
            parent_id=1,
            kind="project",
            doc_type="contrato",
            description="[SEM ANEXO] Aditivo",
            value=1500.5,
        )

        response = await client.post(
            "/api/projects/1/contracts",
            data={"description": "Aditivo", "value": "1500,50"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["saved"] is True
        assert body["document"]["display_name"] == "Contrato (Sem Anexo)"
        kwargs = project_service.documents.save_contract.await_args.kwargs
        assert kwargs["file"] is None
        assert kwargs["description"] == "Aditivo"
        assert kwargs["value"] == 1500.5
        assert kwargs["expires_at"] is UNSET
        assert kwargs["existing_doc_id"] is None

    async def test_contract_with_file(self, client: AsyncClient, admin_headers, project_service):
        response = await client.post(
            "/api/projects/1/contracts",
            files={"file": ("contrato.pdf", b"%PDF-1.4", "application/pdf")},
            data={"expires_at": "2025-12-31"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"saved": False, "document": None}
        kwargs = project_service.documents.save_contract.await_args.kwargs
        assert kwargs["file"].filename == "contrato.pdf"
        assert kwargs["file"].content == b"%PDF-1.4"
        assert kwargs["expires_at"].isoformat() == "2025-12-31"
        assert kwargs["description"] is UNSET

    async def test_invalid_value(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/api/projects/1/contracts", data={"value": "mil reais"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
