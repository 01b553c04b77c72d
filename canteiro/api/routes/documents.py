"""
Document endpoints shared by every parent record.

Each parent router (projects, employees, vehicles, accommodations) gets
the same routes under ``/{record_id}/documents``, plus a batch listing at
``/documents/batch``. Saves are multipart forms: a form field that is
absent leaves the stored value unchanged, while a field sent empty clears
it.
"""

from collections.abc import Awaitable, Callable
from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from starlette.datastructures import FormData

from canteiro.api.dependencies import get_app_settings
from canteiro.application.dto.responses import (
    DocumentResponse,
    DocumentSaveResponse,
    DocumentSetResponse,
    ErrorResponse,
)
from canteiro.config import Settings
from canteiro.core.entities.document import (
    UNSET,
    DocumentSaveRequest,
    FileUpload,
    TypedDocument,
)
from canteiro.core.exceptions import DocumentNotFoundError, FileTooLargeError, ValidationError
from canteiro.core.services import RecordService, parse_date

ServiceProvider = Callable[..., Awaitable[RecordService]]


async def read_upload(file: UploadFile | None, max_size: int) -> FileUpload | None:
    """Read a multipart file into memory, enforcing the upload limit."""
    if file is None or not file.filename:
        return None
    content = await file.read()
    if len(content) > max_size:
        raise FileTooLargeError(file.filename, len(content), max_size)
    return FileUpload(
        filename=file.filename,
        content=content,
        content_type=file.content_type or "application/octet-stream",
    )


def parse_form_date(raw: str) -> date:
    parsed = parse_date(raw)
    if parsed is None:
        raise ValidationError(field="expires_at", message="Invalid date", value=raw)
    return parsed


def parse_form_value(raw: str) -> float:
    try:
        return float(raw.replace(",", "."))
    except ValueError:
        raise ValidationError(field="value", message="Invalid number", value=raw) from None


def form_field(
    form: FormData,
    name: str,
    raw: str | None,
    parse: Callable[[str], Any] = str,
) -> Any:
    """UNSET when the field was not sent, None when sent empty, else parsed."""
    if name not in form:
        return UNSET
    if raw is None or not raw.strip():
        return None
    return parse(raw.strip())


async def owned_document(
    service: RecordService, record_id: int, doc_id: int
) -> TypedDocument:
    """Fetch a document and make sure it belongs to the record."""
    doc = await service.documents.get_document(doc_id)
    if doc is None or doc.parent_id != record_id:
        raise DocumentNotFoundError(doc_id, kind=service.documents.kind.name)
    return doc


def add_document_routes(router: APIRouter, get_service: ServiceProvider) -> None:
    """Register list/save/delete document routes on a parent router."""

    @router.get("/documents/batch", response_model=dict[int, DocumentSetResponse])
    async def list_documents_batch(
        ids: list[int] = Query(..., description="Record IDs; repeat the parameter per ID"),
        service: RecordService = Depends(get_service),
    ) -> dict[int, DocumentSetResponse]:
        """Documents of many records with one query, keyed by record ID."""
        grouped = await service.documents.get_documents_for(ids)
        return {pid: DocumentSetResponse.from_set(s) for pid, s in grouped.items()}

    @router.get(
        "/{record_id}/documents",
        response_model=DocumentSetResponse,
        responses={404: {"model": ErrorResponse}},
    )
    async def list_documents(
        record_id: int,
        service: RecordService = Depends(get_service),
    ) -> DocumentSetResponse:
        """Documents of a record, grouped into slots and contracts."""
        await service.get(record_id)
        return DocumentSetResponse.from_set(await service.documents.get_documents(record_id))

    @router.post(
        "/{record_id}/documents",
        response_model=DocumentSaveResponse,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            413: {"model": ErrorResponse},
            502: {"model": ErrorResponse},
        },
    )
    async def save_document(
        record_id: int,
        request: Request,
        doc_type: str = Form(..., description="Document type; unknown types are stored as 'outros'"),
        file: UploadFile | None = File(default=None),
        existing_doc_id: int | None = Form(default=None),
        expires_at: str | None = Form(default=None, description="YYYY-MM-DD; empty clears"),
        description: str | None = Form(default=None),
        value: str | None = Form(default=None, description="Contract value"),
        service: RecordService = Depends(get_service),
        settings: Settings = Depends(get_app_settings),
    ) -> DocumentSaveResponse:
        """
        Create or update a document of the record.

        Without ``existing_doc_id`` a file is required for regular types;
        contracts may be registered without one.
        """
        await service.get(record_id)
        if existing_doc_id is not None:
            await owned_document(service, record_id, existing_doc_id)

        form = await request.form()
        save_request = DocumentSaveRequest(
            doc_type=doc_type,
            file=await read_upload(file, settings.api.max_upload_size),
            expires_at=form_field(form, "expires_at", expires_at, parse_form_date),
            existing_doc_id=existing_doc_id,
            description=form_field(form, "description", description),
            value=form_field(form, "value", value, parse_form_value),
        )
        [doc] = await service.documents.save_many(record_id, [save_request])

        if doc is None:
            return DocumentSaveResponse(saved=False)
        return DocumentSaveResponse(saved=True, document=DocumentResponse.from_entity(doc))

    @router.delete(
        "/{record_id}/documents/{doc_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses={404: {"model": ErrorResponse}},
    )
    async def delete_document(
        record_id: int,
        doc_id: int,
        service: RecordService = Depends(get_service),
    ) -> None:
        """Delete a document row and its stored file."""
        await owned_document(service, record_id, doc_id)
        await service.documents.delete_document(doc_id)


__all__ = [
    "add_document_routes",
    "form_field",
    "owned_document",
    "parse_form_date",
    "parse_form_value",
    "read_upload",
]
