"""Pytest fixtures for SQLite storage tests."""

from datetime import date

import pytest

from canteiro.core.entities import (
    EMPLOYEE_DOCUMENTS,
    PROJECT_DOCUMENTS,
    Accommodation,
    Employee,
    Project,
    Vehicle,
)
from canteiro.infrastructure.storage.sqlite import (
    SQLiteAccommodationStore,
    SQLiteBillStore,
    SQLiteBudgetStore,
    SQLiteDocumentStore,
    SQLiteEmployeeStore,
    SQLiteHistoryStore,
    SQLiteProjectStore,
    SQLiteVehicleStore,
)


@pytest.fixture
def project_store(sqlite_db) -> SQLiteProjectStore:
    return SQLiteProjectStore()


@pytest.fixture
def employee_store(sqlite_db) -> SQLiteEmployeeStore:
    return SQLiteEmployeeStore()


@pytest.fixture
def vehicle_store(sqlite_db) -> SQLiteVehicleStore:
    return SQLiteVehicleStore()


@pytest.fixture
def accommodation_store(sqlite_db) -> SQLiteAccommodationStore:
    return SQLiteAccommodationStore()


@pytest.fixture
def bill_store(sqlite_db) -> SQLiteBillStore:
    return SQLiteBillStore()


@pytest.fixture
def budget_store(sqlite_db) -> SQLiteBudgetStore:
    return SQLiteBudgetStore()


@pytest.fixture
def history_store(sqlite_db) -> SQLiteHistoryStore:
    return SQLiteHistoryStore()


@pytest.fixture
def project_docs(sqlite_db) -> SQLiteDocumentStore:
    return SQLiteDocumentStore(PROJECT_DOCUMENTS)


@pytest.fixture
def employee_docs(sqlite_db) -> SQLiteDocumentStore:
    return SQLiteDocumentStore(EMPLOYEE_DOCUMENTS)


@pytest.fixture
async def project(project_store) -> Project:
    """A stored project."""
    return await project_store.create(
        Project(name="Residencial Aurora", city="Curitiba", state="PR", start_date=date(2024, 1, 15))
    )


@pytest.fixture
async def employee(employee_store) -> Employee:
    return await employee_store.create(Employee(name="Maria Souza"))


@pytest.fixture
async def vehicle(vehicle_store, project) -> Vehicle:
    return await vehicle_store.create(
        Vehicle(brand="Fiat", model="Strada", plate="BRA1B23", project_id=project.id)
    )


@pytest.fixture
async def accommodation(accommodation_store, project) -> Accommodation:
    return await accommodation_store.create(Accommodation(name="Casa 2", project_id=project.id))
