"""
Document lifecycle service.

Attaches typed documents to a parent record: uploads the file to the blob
store under a collision-free path, then writes (or updates) the metadata
row that points at the blob's public URL. One instance serves one
document kind; projects, employees, vehicles and accommodations all go
through the same routine. Pure service: stores are injected.
"""

import asyncio
import uuid
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from canteiro.config import get_logger
from canteiro.core.entities.document import (
    UNSET,
    DocumentKind,
    DocumentSaveRequest,
    DocumentSet,
    FileUpload,
    TypedDocument,
    Unset,
)
from canteiro.core.exceptions import (
    BlobAlreadyExistsError,
    BlobStorageError,
    DocumentNotFoundError,
    UploadFailedError,
)
from canteiro.core.interfaces.storage import IBlobStore, IDocumentStore

logger = get_logger(__name__)

NO_ATTACHMENT_PREFIX = "[SEM ANEXO]"
NO_ATTACHMENT_DESCRIPTION = "Não possui anexo"


def describe_contract(description: str | None, has_file: bool) -> str | None:
    """
    Normalise a contract description.

    Contracts saved without a file are flagged in their description so the
    listing shows why there is nothing to download.
    """
    text = description or ""
    if has_file:
        return text or None
    if not text.strip():
        return NO_ATTACHMENT_DESCRIPTION
    if text.startswith(NO_ATTACHMENT_PREFIX):
        return text
    return f"{NO_ATTACHMENT_PREFIX} {text}"


class DocumentLifecycleService:
    """
    Upsert, list and delete the documents of one parent kind.

    Each save is strictly ordered (upload, then metadata write). Independent
    saves of one form submission run concurrently via ``save_many``.
    """

    def __init__(
        self,
        row_store: IDocumentStore,
        blob_store: IBlobStore,
        id_factory: Callable[[], str] | None = None,
    ):
        self._rows = row_store
        self._blobs = blob_store
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))

    @property
    def kind(self) -> DocumentKind:
        return self._rows.kind

    async def upsert_document(
        self,
        parent_id: int,
        doc_type: str,
        file: FileUpload | None = None,
        expires_at: date | None | Unset = UNSET,
        existing_doc_id: int | None = None,
        description: str | None | Unset = UNSET,
    ) -> TypedDocument | None:
        """
        Create or update a document in a parent's slot.

        With ``existing_doc_id`` only the supplied fields change (UNSET
        leaves a field alone, None clears it); a new file replaces the
        blob reference. Without it a file is required: the call is a
        no-op when there is nothing to create.

        Returns:
            The stored document, or None when nothing was written.
        """
        safe_type = self.kind.coerce_type(doc_type)

        if existing_doc_id is not None:
            updates: dict[str, Any] = {}
            if expires_at is not UNSET:
                updates["expires_at"] = expires_at
            if description is not UNSET:
                updates["description"] = description
            if file is not None:
                updates.update(await self._upload(parent_id, safe_type, file))

            if not updates:
                logger.debug(
                    "document_update_skipped",
                    kind=self.kind.name,
                    doc_id=existing_doc_id,
                )
                return None

            return await self._apply_update(existing_doc_id, updates)

        if file is None:
            logger.debug(
                "document_upsert_noop",
                kind=self.kind.name,
                parent_id=parent_id,
                doc_type=safe_type,
            )
            return None

        stored = await self._upload(parent_id, safe_type, file)
        return await self._insert(
            parent_id,
            safe_type,
            stored,
            expires_at=None if expires_at is UNSET else expires_at,
            description=None if description is UNSET else description,
        )

    async def save_contract(
        self,
        parent_id: int,
        file: FileUpload | None = None,
        expires_at: date | None | Unset = UNSET,
        value: float | None | Unset = UNSET,
        description: str | None | Unset = UNSET,
        existing_doc_id: int | None = None,
    ) -> TypedDocument | None:
        """
        Save a contract of the parent.

        Contracts accumulate instead of occupying a slot: a new contract is
        always inserted, with or without a file, and a file sent for an
        existing contract is stored as a new row so earlier versions are
        kept. Without a file an existing contract only gets its metadata
        updated.
        """
        contract_type = self.kind.contract_type
        if contract_type is None:
            raise ValueError(f"Document kind '{self.kind.name}' has no contracts")

        given_description = None if description is UNSET else description
        given_expiry = None if expires_at is UNSET else expires_at
        given_value = None if value is UNSET else value

        if existing_doc_id is None:
            stored = await self._upload(parent_id, contract_type, file) if file else {}
            return await self._insert(
                parent_id,
                contract_type,
                stored,
                expires_at=given_expiry,
                description=describe_contract(given_description, file is not None),
                value=given_value,
            )

        if file is not None:
            stored = await self._upload(parent_id, contract_type, file)
            return await self._insert(
                parent_id,
                contract_type,
                stored,
                expires_at=given_expiry,
                description=given_description or None,
                value=given_value,
            )

        updates: dict[str, Any] = {}
        if expires_at is not UNSET:
            updates["expires_at"] = expires_at
        if value is not UNSET:
            updates["value"] = value
        if description is not UNSET:
            updates["description"] = description
        if not updates:
            return None
        return await self._apply_update(existing_doc_id, updates)

    async def save_many(
        self,
        parent_id: int,
        requests: list[DocumentSaveRequest],
    ) -> list[TypedDocument | None]:
        """Run independent document saves concurrently."""

        async def _save(request: DocumentSaveRequest) -> TypedDocument | None:
            contract_type = self.kind.contract_type
            if contract_type and self.kind.coerce_type(request.doc_type) == contract_type:
                return await self.save_contract(
                    parent_id,
                    file=request.file,
                    expires_at=request.expires_at,
                    value=request.value,
                    description=request.description,
                    existing_doc_id=request.existing_doc_id,
                )
            return await self.upsert_document(
                parent_id,
                request.doc_type,
                file=request.file,
                expires_at=request.expires_at,
                existing_doc_id=request.existing_doc_id,
                description=request.description,
            )

        results = await asyncio.gather(*(_save(r) for r in requests))
        return list(results)

    async def delete_document(self, doc_id: int) -> None:
        """
        Delete a document row and, best effort, its blob.

        The row is the source of truth: a blob that cannot be removed is
        logged and left behind, while a failed row delete propagates.

        Raises:
            DocumentNotFoundError: If the row does not exist.
        """
        doc = await self._rows.get(doc_id)
        if doc is None:
            raise DocumentNotFoundError(doc_id, kind=self.kind.name)

        if doc.blob_url:
            await self.remove_blob(doc.blob_url)

        deleted = await self._rows.delete(doc_id)
        if not deleted:
            raise DocumentNotFoundError(doc_id, kind=self.kind.name)

        logger.info(
            "document_deleted",
            kind=self.kind.name,
            doc_id=doc_id,
            parent_id=doc.parent_id,
        )

    async def remove_blob(self, url: str) -> bool:
        """Remove the blob behind a public URL; failures are only logged."""
        try:
            path = self._blobs.path_from_url(url)
            if path is None:
                logger.warning("blob_path_unresolved", kind=self.kind.name, url=url)
                return False
            return await self._blobs.remove(path)
        except Exception as e:
            logger.warning(
                "blob_remove_failed",
                kind=self.kind.name,
                url=url,
                error=str(e),
            )
            return False

    async def get_document(self, doc_id: int) -> TypedDocument | None:
        return await self._rows.get(doc_id)

    async def get_documents(self, parent_id: int) -> DocumentSet:
        docs = await self._rows.list_by_parent(parent_id)
        return DocumentSet.from_documents(self.kind, docs)

    async def get_documents_for(self, parent_ids: list[int]) -> dict[int, DocumentSet]:
        """Group the documents of many parents with a single query."""
        if not parent_ids:
            return {}
        docs = await self._rows.list_by_parents(parent_ids)
        grouped: dict[int, list[TypedDocument]] = {pid: [] for pid in parent_ids}
        for doc in docs:
            grouped.setdefault(doc.parent_id, []).append(doc)
        return {
            pid: DocumentSet.from_documents(self.kind, items)
            for pid, items in grouped.items()
        }

    async def list_with_expiry(self, until: date | None = None) -> list[TypedDocument]:
        return await self._rows.list_with_expiry(until=until)

    async def _upload(
        self,
        parent_id: int,
        doc_type: str,
        file: FileUpload,
    ) -> dict[str, Any]:
        """Upload a file and return the row fields that reference it."""
        path = self.kind.storage_path(
            parent_id, doc_type, f"{self._new_id()}.{file.extension}"
        )
        try:
            await self._blobs.upload(path, file.content, file.content_type)
        except (UploadFailedError, BlobAlreadyExistsError):
            raise
        except (BlobStorageError, OSError) as e:
            logger.error(
                "document_upload_failed",
                kind=self.kind.name,
                path=path,
                error=str(e),
            )
            raise UploadFailedError(path, str(e)) from e

        logger.info(
            "document_uploaded",
            kind=self.kind.name,
            parent_id=parent_id,
            path=path,
            size=file.size,
        )
        return {
            "file_name": file.filename,
            "blob_url": self._blobs.get_public_url(path),
            "uploaded_at": datetime.utcnow(),
        }

    async def _insert(
        self,
        parent_id: int,
        doc_type: str,
        stored: dict[str, Any],
        expires_at: date | None = None,
        description: str | None = None,
        value: float | None = None,
    ) -> TypedDocument:
        doc = TypedDocument(
            parent_id=parent_id,
            kind=self.kind.name,
            doc_type=doc_type,
            description=description,
            expires_at=expires_at,
            value=value,
            **stored,
        )
        return await self._rows.insert(doc)

    async def _apply_update(self, doc_id: int, updates: dict[str, Any]) -> TypedDocument:
        updated = await self._rows.update_fields(doc_id, updates)
        if not updated:
            raise DocumentNotFoundError(doc_id, kind=self.kind.name)
        logger.info(
            "document_updated",
            kind=self.kind.name,
            doc_id=doc_id,
            fields=sorted(updates),
        )
        doc = await self._rows.get(doc_id)
        if doc is None:
            raise DocumentNotFoundError(doc_id, kind=self.kind.name)
        return doc
