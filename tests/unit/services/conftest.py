"""Pytest configuration for unit service tests.

Stores are mocked; nothing here touches the database or the filesystem.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from canteiro.core.entities.document import PROJECT_DOCUMENTS, TypedDocument
from canteiro.core.interfaces.storage import IBlobStore, IDocumentStore
from canteiro.core.services.document_lifecycle import DocumentLifecycleService

PUBLIC_BASE = "http://test/files/crm-docs"


@pytest.fixture
def blob_store() -> AsyncMock:
    """Blob store mock resolving URLs under the test bucket."""
    store = AsyncMock(spec=IBlobStore)
    store.upload.side_effect = lambda path, data, content_type: path
    store.remove.return_value = True
    store.get_public_url = MagicMock(side_effect=lambda path: f"{PUBLIC_BASE}/{path}")
    store.path_from_url = MagicMock(
        side_effect=lambda url: url.split("crm-docs/", 1)[1] if "crm-docs/" in url else None
    )
    return store


def _row_store_for(kind) -> AsyncMock:
    """Row store mock that assigns ids on insert."""
    store = AsyncMock(spec=IDocumentStore)
    store.kind = kind

    async def insert(doc: TypedDocument) -> TypedDocument:
        return doc.model_copy(update={"id": 100})

    store.insert.side_effect = insert
    store.update_fields.return_value = True
    store.delete.return_value = True
    store.list_by_parent.return_value = []
    return store


@pytest.fixture
def row_store_factory():
    return _row_store_for


@pytest.fixture
def row_store() -> AsyncMock:
    return _row_store_for(PROJECT_DOCUMENTS)


@pytest.fixture
def lifecycle(row_store, blob_store) -> DocumentLifecycleService:
    """Project document service with a fixed blob id."""
    return DocumentLifecycleService(row_store, blob_store, id_factory=lambda: "fixed-id")
