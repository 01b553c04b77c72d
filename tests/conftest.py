"""Pytest configuration and fixtures."""

import os
import tempfile
from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path

import pytest

# Settings-driven directories must not land in the working tree
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="canteiro-tests-"))
os.environ.setdefault("STORAGE_DATA_DIR", str(_TEST_DATA_DIR))
os.environ.setdefault("BLOB_ROOT_DIR", str(_TEST_DATA_DIR / "blobs"))

from canteiro.core.entities import (  # noqa: E402
    Bill,
    Budget,
    Employee,
    Project,
    Role,
    TypedDocument,
    UserContext,
    Vehicle,
)
from canteiro.infrastructure.storage.sqlite import close_pool, set_pool  # noqa: E402
from canteiro.infrastructure.storage.sqlite.connection import ConnectionPool  # noqa: E402
from canteiro.infrastructure.storage.sqlite.migrations import initialize_database  # noqa: E402

VALID_CNPJ = "11.222.333/0001-81"


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def sqlite_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated temporary database installed as the global pool."""
    await initialize_database(temp_db_path, create_backup_before=False)
    await set_pool(ConnectionPool(temp_db_path, pool_size=2))
    yield temp_db_path
    await close_pool()


@pytest.fixture
def today() -> date:
    return date(2024, 6, 1)


@pytest.fixture
def admin_user() -> UserContext:
    return UserContext(user_id="admin-1", role=Role.ADMIN)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-User-Id": "admin-1", "X-User-Role": "admin"}


@pytest.fixture
def sample_project() -> Project:
    return Project(
        id=1,
        name="Residencial Aurora",
        tax_id=VALID_CNPJ,
        address="Rua das Flores, 100",
        city="Curitiba",
        state="PR",
        client="Construtora Sul",
        contract_value=250000.0,
        start_date=date(2024, 1, 15),
    )


@pytest.fixture
def sample_employee() -> Employee:
    return Employee(id=7, name="Maria Souza", role="Engenheira", state="SP")


@pytest.fixture
def sample_vehicle() -> Vehicle:
    return Vehicle(id=3, brand="Fiat", model="Strada", plate="BRA1B23")


@pytest.fixture
def sample_document(today: date) -> TypedDocument:
    return TypedDocument(
        id=10,
        parent_id=1,
        kind="project",
        doc_type="pgr",
        file_name="pgr.pdf",
        blob_url="http://localhost:8000/files/crm-docs/1/pgr/abc.pdf",
        expires_at=date(2024, 6, 20),
    )


@pytest.fixture
def sample_bill() -> Bill:
    return Bill(
        id=20,
        description="Aluguel alojamento",
        amount=1850.5,
        due_date=date(2024, 6, 10),
        category="Alojamento",
        accommodation_id=4,
    )


@pytest.fixture
def sample_budget() -> Budget:
    return Budget(
        id=30,
        code="ORC-2024-003",
        client="Construtora Sul",
        tax_id=VALID_CNPJ,
        amount=98000.0,
    )
