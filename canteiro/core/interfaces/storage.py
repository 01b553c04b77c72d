"""
Abstract interfaces for storage providers.

Defines contracts for the row store (records, documents, history) and the
blob store holding uploaded files.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Generic, TypeVar

from canteiro.core.entities.document import DocumentKind, TypedDocument
from canteiro.core.entities.finance import Bill, BillTotals, Budget
from canteiro.core.entities.records import ProjectHistoryEntry

T = TypeVar("T")


class IDocumentStore(ABC):
    """
    Abstract interface for the metadata rows of one document kind.

    Rows reference their blob by public URL only.
    """

    kind: DocumentKind

    @abstractmethod
    async def insert(self, doc: TypedDocument) -> TypedDocument:
        """Insert a new document row and return it with its ID."""
        pass

    @abstractmethod
    async def get(self, doc_id: int) -> TypedDocument | None:
        """Get document by ID."""
        pass

    @abstractmethod
    async def update_fields(self, doc_id: int, fields: dict[str, Any]) -> bool:
        """Apply a partial update. Returns False if the row does not exist."""
        pass

    @abstractmethod
    async def delete(self, doc_id: int) -> bool:
        """Delete a document row."""
        pass

    @abstractmethod
    async def list_by_parent(self, parent_id: int) -> list[TypedDocument]:
        """List documents of one parent record."""
        pass

    @abstractmethod
    async def list_by_parents(self, parent_ids: list[int]) -> list[TypedDocument]:
        """List documents of several parent records in one query."""
        pass

    @abstractmethod
    async def list_with_expiry(self, until: date | None = None) -> list[TypedDocument]:
        """List documents that have an expiry date, soonest first."""
        pass


class IBlobStore(ABC):
    """
    Abstract interface for path-addressed file storage.

    Uploads never overwrite: an existing path is an error.
    """

    @abstractmethod
    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store bytes at a new path. Returns the stored path."""
        pass

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        """Resolve the public URL of a stored path."""
        pass

    @abstractmethod
    async def remove(self, path: str) -> bool:
        """Remove a stored file. Returns False if nothing was there."""
        pass

    @abstractmethod
    def path_from_url(self, url: str) -> str | None:
        """Recover the storage path from a public URL, or None if foreign."""
        pass


class IRecordStore(ABC, Generic[T]):
    """Abstract interface for a parent record table."""

    entity: str

    @abstractmethod
    async def create(self, record: T) -> T:
        """Create a new record."""
        pass

    @abstractmethod
    async def get(self, record_id: int) -> T | None:
        """Get record by ID."""
        pass

    @abstractmethod
    async def list_all(self, limit: int = 100, offset: int = 0) -> list[T]:
        """List records with pagination."""
        pass

    @abstractmethod
    async def update(self, record: T) -> T:
        """Update an existing record."""
        pass

    @abstractmethod
    async def delete(self, record_id: int) -> bool:
        """Delete a record after clearing or removing dependent rows."""
        pass

    @abstractmethod
    async def names_for(self, record_ids: list[int]) -> dict[int, str]:
        """Display names for a set of record IDs."""
        pass


class IBillStore(IRecordStore[Bill]):
    """Abstract interface for accounts payable."""

    @abstractmethod
    async def totals_by_status(self) -> BillTotals:
        """Count and sum bills per status."""
        pass


class IBudgetStore(IRecordStore[Budget]):
    """Abstract interface for client budgets."""

    @abstractmethod
    async def last_code(self, prefix: str) -> str | None:
        """Highest budget code starting with ``prefix``, if any."""
        pass


class IHistoryStore(ABC):
    """Abstract interface for the project change history."""

    @abstractmethod
    async def record(self, entries: list[ProjectHistoryEntry]) -> list[ProjectHistoryEntry]:
        """Persist change entries."""
        pass

    @abstractmethod
    async def list_for_project(self, project_id: int) -> list[ProjectHistoryEntry]:
        """List changes of one project, newest first."""
        pass
