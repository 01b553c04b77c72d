"""
List Expiring Documents Use Case.

Collects every document with an expiry date across projects, employees,
vehicles and accommodations and turns them into dashboard alert rows.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import date, timedelta

from canteiro.config import get_logger
from canteiro.core.entities.alert import AlertSeverity
from canteiro.core.entities.document import (
    DOCUMENT_KINDS,
    ExpiringDocument,
    TypedDocument,
)
from canteiro.core.interfaces.storage import IDocumentStore, IRecordStore
from canteiro.core.services.validation import days_until, get_alert_status

logger = get_logger(__name__)


@dataclass
class ExpiringDocumentsResult:
    """Sorted alert rows plus how many fall in each severity."""

    documents: list[ExpiringDocument] = field(default_factory=list)
    counts: dict[str, int] = field(
        default_factory=lambda: {s.value: 0 for s in AlertSeverity}
    )

    @property
    def total(self) -> int:
        return len(self.documents)


class ListExpiringDocumentsUseCase:
    """
    Use case for the dashboard's expiring documents panel.

    Rows are ordered most urgent first (expired, warning, ok) and by
    expiry date within a severity.
    """

    def __init__(
        self,
        document_stores: dict[str, IDocumentStore] | None = None,
        parent_stores: dict[str, IRecordStore] | None = None,
    ):
        self._document_stores = document_stores
        self._parent_stores = parent_stores

    async def _get_document_stores(self) -> dict[str, IDocumentStore]:
        if self._document_stores is None:
            from canteiro.infrastructure.storage.sqlite import get_document_store

            self._document_stores = {
                name: await get_document_store(kind) for name, kind in DOCUMENT_KINDS.items()
            }
        return self._document_stores

    async def _get_parent_stores(self) -> dict[str, IRecordStore]:
        if self._parent_stores is None:
            from canteiro.infrastructure.storage.sqlite import (
                get_accommodation_store,
                get_employee_store,
                get_project_store,
                get_vehicle_store,
            )

            self._parent_stores = {
                "project": await get_project_store(),
                "employee": await get_employee_store(),
                "vehicle": await get_vehicle_store(),
                "accommodation": await get_accommodation_store(),
            }
        return self._parent_stores

    async def _collect(
        self,
        kind_name: str,
        doc_store: IDocumentStore,
        until: date | None,
        today: date,
    ) -> list[ExpiringDocument]:
        docs = await doc_store.list_with_expiry(until=until)
        if not docs:
            return []

        parent_stores = await self._get_parent_stores()
        names: dict[int, str] = {}
        parent_store = parent_stores.get(kind_name)
        if parent_store is not None:
            names = await parent_store.names_for(sorted({d.parent_id for d in docs}))

        kind = DOCUMENT_KINDS[kind_name]
        return [self._to_row(doc, kind.label, names, today) for doc in docs]

    @staticmethod
    def _to_row(
        doc: TypedDocument,
        category: str,
        names: dict[int, str],
        today: date,
    ) -> ExpiringDocument:
        return ExpiringDocument(
            document=doc,
            category=category,
            parent_name=names.get(doc.parent_id, "N/A"),
            status=get_alert_status(doc.expires_at, today=today),
            days_left=days_until(doc.expires_at, today=today),
        )

    async def execute(
        self,
        within_days: int | None = None,
        today: date | None = None,
    ) -> ExpiringDocumentsResult:
        """
        Gather expiring documents of every kind.

        Args:
            within_days: Only keep documents expiring at most this many days
                ahead (expired ones are always kept). None keeps all.
            today: Reference day (default: the current date).

        Returns:
            ExpiringDocumentsResult sorted by severity, then expiry date.
        """
        today = today or date.today()
        until = today + timedelta(days=within_days) if within_days is not None else None

        doc_stores = await self._get_document_stores()
        batches = await asyncio.gather(
            *(
                self._collect(name, store, until, today)
                for name, store in doc_stores.items()
            )
        )

        rows = [row for batch in batches for row in batch]
        rows.sort(
            key=lambda r: (
                r.status.severity.rank,
                r.document.expires_at or date.max,
            )
        )

        result = ExpiringDocumentsResult(documents=rows)
        for row in rows:
            result.counts[row.status.severity.value] += 1

        logger.info(
            "expiring_documents_listed",
            total=result.total,
            expired=result.counts[AlertSeverity.EXPIRED.value],
            warning=result.counts[AlertSeverity.WARNING.value],
        )
        return result
