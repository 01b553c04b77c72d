"""Unit tests for ListExpiringDocumentsUseCase."""

from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from canteiro.application.use_cases.list_expiring_documents import (
    ExpiringDocumentsResult,
    ListExpiringDocumentsUseCase,
)
from canteiro.core.entities.alert import AlertSeverity
from canteiro.core.entities.document import TypedDocument

TODAY = date(2024, 6, 1)


def _doc(doc_id: int, kind: str, parent_id: int, days: int, doc_type: str = "outros") -> TypedDocument:
    """Document of a kind expiring ``days`` after TODAY."""
    return TypedDocument(
        id=doc_id,
        parent_id=parent_id,
        kind=kind,
        doc_type=doc_type,
        expires_at=TODAY + timedelta(days=days),
    )


def _stores(docs_by_kind: dict[str, list[TypedDocument]], names: dict[str, dict[int, str]]):
    """Create mock document and parent stores."""
    doc_stores = {}
    parent_stores = {}
    for kind in ("project", "employee", "vehicle", "accommodation"):
        doc_store = AsyncMock()
        doc_store.list_with_expiry.return_value = docs_by_kind.get(kind, [])
        doc_stores[kind] = doc_store

        parent_store = AsyncMock()
        parent_store.names_for.return_value = names.get(kind, {})
        parent_stores[kind] = parent_store
    return doc_stores, parent_stores


class TestListExpiringDocuments:
    """Tests for the dashboard expiring documents listing."""

    @pytest.mark.asyncio
    async def test_no_documents(self):
        doc_stores, parent_stores = _stores({}, {})

        uc = ListExpiringDocumentsUseCase(doc_stores, parent_stores)
        result = await uc.execute(today=TODAY)

        assert isinstance(result, ExpiringDocumentsResult)
        assert result.total == 0
        assert result.counts == {"expired": 0, "warning": 0, "ok": 0, "neutral": 0}
        for store in parent_stores.values():
            store.names_for.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sorted_by_severity_then_date(self):
        doc_stores, parent_stores = _stores(
            {
                "project": [_doc(1, "project", 1, 90, "pgr"), _doc(2, "project", 1, -3, "art")],
                "employee": [_doc(3, "employee", 7, 10, "aso")],
                "vehicle": [_doc(4, "vehicle", 2, 0, "crlv"), _doc(5, "vehicle", 2, -40, "seguro")],
            },
            {
                "project": {1: "Residencial Aurora"},
                "employee": {7: "Maria Souza"},
                "vehicle": {2: "BRA1B23 - Strada"},
            },
        )

        uc = ListExpiringDocumentsUseCase(doc_stores, parent_stores)
        result = await uc.execute(today=TODAY)

        assert [row.document.id for row in result.documents] == [5, 2, 4, 3, 1]
        assert [row.status.severity for row in result.documents] == [
            AlertSeverity.EXPIRED,
            AlertSeverity.EXPIRED,
            AlertSeverity.WARNING,
            AlertSeverity.WARNING,
            AlertSeverity.OK,
        ]
        assert result.counts["expired"] == 2
        assert result.counts["warning"] == 2
        assert result.counts["ok"] == 1
        assert result.total == 5

    @pytest.mark.asyncio
    async def test_rows_carry_category_and_parent_name(self):
        doc_stores, parent_stores = _stores(
            {"employee": [_doc(3, "employee", 7, 10, "aso")]},
            {"employee": {7: "Maria Souza"}},
        )

        uc = ListExpiringDocumentsUseCase(doc_stores, parent_stores)
        result = await uc.execute(today=TODAY)

        [row] = result.documents
        assert row.category == "Colaborador"
        assert row.parent_name == "Maria Souza"
        assert row.days_left == 10
        parent_stores["employee"].names_for.assert_awaited_once_with([7])

    @pytest.mark.asyncio
    async def test_unknown_parent_name(self):
        doc_stores, parent_stores = _stores(
            {"accommodation": [_doc(8, "accommodation", 99, 5, "conta_luz")]},
            {},
        )

        uc = ListExpiringDocumentsUseCase(doc_stores, parent_stores)
        result = await uc.execute(today=TODAY)

        assert result.documents[0].parent_name == "N/A"
        assert result.documents[0].category == "Alojamento"

    @pytest.mark.asyncio
    async def test_within_days_limits_store_query(self):
        doc_stores, parent_stores = _stores({}, {})

        uc = ListExpiringDocumentsUseCase(doc_stores, parent_stores)
        await uc.execute(within_days=30, today=TODAY)

        for store in doc_stores.values():
            store.list_with_expiry.assert_awaited_once_with(until=date(2024, 7, 1))

    @pytest.mark.asyncio
    async def test_without_window_lists_everything(self):
        doc_stores, parent_stores = _stores({}, {})

        uc = ListExpiringDocumentsUseCase(doc_stores, parent_stores)
        await uc.execute(today=TODAY)

        for store in doc_stores.values():
            store.list_with_expiry.assert_awaited_once_with(until=None)
