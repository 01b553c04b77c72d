"""Fixtures for API tests: mocked services behind dependency overrides."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from canteiro.api.dependencies import (
    get_accommodation_svc,
    get_bill_svc,
    get_budget_svc,
    get_employee_svc,
    get_project_svc,
    get_vehicle_svc,
)
from canteiro.api.main import app
from canteiro.core.entities import (
    ACCOMMODATION_DOCUMENTS,
    EMPLOYEE_DOCUMENTS,
    PROJECT_DOCUMENTS,
    VEHICLE_DOCUMENTS,
    Accommodation,
    BillTotals,
    DocumentKind,
    DocumentSet,
)


def _mock_service(kind: DocumentKind, record) -> AsyncMock:
    """Record service mock whose documents attribute is a lifecycle mock."""
    service = AsyncMock()
    service.get.return_value = record
    service.list_all.return_value = [record]
    service.create.return_value = record
    service.update.return_value = record
    service.delete.return_value = None

    service.documents = AsyncMock()
    service.documents.kind = kind
    service.documents.get_documents.return_value = DocumentSet()
    service.documents.get_document.return_value = None
    service.documents.save_many.return_value = [None]
    service.documents.save_contract.return_value = None
    return service


def _provider(service: AsyncMock):
    return lambda: service


@pytest.fixture
def project_service(sample_project) -> AsyncMock:
    service = _mock_service(PROJECT_DOCUMENTS, sample_project)
    service.history.return_value = []
    return service


@pytest.fixture
def employee_service(sample_employee) -> AsyncMock:
    return _mock_service(EMPLOYEE_DOCUMENTS, sample_employee)


@pytest.fixture
def vehicle_service(sample_vehicle) -> AsyncMock:
    return _mock_service(VEHICLE_DOCUMENTS, sample_vehicle)


@pytest.fixture
def accommodation_service() -> AsyncMock:
    return _mock_service(ACCOMMODATION_DOCUMENTS, Accommodation(id=4, name="Casa 2"))


@pytest.fixture
def bill_service(sample_bill) -> AsyncMock:
    service = AsyncMock()
    service.get.return_value = sample_bill
    service.list_all.return_value = [sample_bill]
    service.create.return_value = sample_bill
    service.update.return_value = sample_bill
    service.totals.return_value = BillTotals()
    return service


@pytest.fixture
def budget_service(sample_budget) -> AsyncMock:
    service = AsyncMock()
    service.get.return_value = sample_budget
    service.list_all.return_value = [sample_budget]
    service.create.return_value = sample_budget
    service.update.return_value = sample_budget
    return service


@pytest.fixture
async def client(
    project_service,
    employee_service,
    vehicle_service,
    accommodation_service,
    bill_service,
    budget_service,
) -> AsyncGenerator[AsyncClient, None]:
    """Async client with every record service overridden."""
    overrides = {
        get_project_svc: project_service,
        get_employee_svc: employee_service,
        get_vehicle_svc: vehicle_service,
        get_accommodation_svc: accommodation_service,
        get_bill_svc: bill_service,
        get_budget_svc: budget_service,
    }
    for dependency, service in overrides.items():
        app.dependency_overrides[dependency] = _provider(service)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)
