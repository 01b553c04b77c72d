"""
Project ("obra") endpoints.
"""

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from canteiro.api.dependencies import get_app_settings, get_project_svc, require
from canteiro.api.routes.documents import (
    add_document_routes,
    form_field,
    owned_document,
    parse_form_date,
    parse_form_value,
    read_upload,
)
from canteiro.application.dto.requests import ProjectRequest
from canteiro.application.dto.responses import (
    DocumentResponse,
    DocumentSaveResponse,
    ErrorResponse,
    ProjectHistoryEntryResponse,
    ProjectResponse,
)
from canteiro.config import Settings
from canteiro.core.entities.document import DocumentSaveRequest
from canteiro.core.entities.records import Project
from canteiro.core.entities.user import UserContext
from canteiro.core.services import ProjectService

CAPABILITY = "obras"

router = APIRouter(
    prefix="/api/projects",
    tags=["projects"],
    dependencies=[Depends(require(CAPABILITY))],
)


def _entity_to_response(project: Project) -> ProjectResponse:
    return ProjectResponse.from_entity(project)


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    limit: int = 100,
    offset: int = 0,
    service: ProjectService = Depends(get_project_svc),
) -> list[ProjectResponse]:
    """List projects, newest first."""
    projects = await service.list_all(limit=limit, offset=offset)
    return [_entity_to_response(p) for p in projects]


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_project(
    request: ProjectRequest,
    service: ProjectService = Depends(get_project_svc),
) -> ProjectResponse:
    """Create a project, registering any contracts sent along."""
    project = Project(**request.model_dump(exclude={"contracts"}))
    contracts = [
        DocumentSaveRequest(
            doc_type="contrato",
            expires_at=c.expires_at,
            description=c.description,
            value=c.value,
        )
        for c in request.contracts
    ]
    created = await service.create(project, documents=contracts)
    return _entity_to_response(created)


@router.get(
    "/{record_id}",
    response_model=ProjectResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_project(
    record_id: int,
    service: ProjectService = Depends(get_project_svc),
) -> ProjectResponse:
    return _entity_to_response(await service.get(record_id))


@router.put(
    "/{record_id}",
    response_model=ProjectResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_project(
    record_id: int,
    request: ProjectRequest,
    user: UserContext = Depends(require(CAPABILITY)),
    service: ProjectService = Depends(get_project_svc),
) -> ProjectResponse:
    """Replace a project's fields; every changed field is recorded in its history."""
    existing = await service.get(record_id)
    project = existing.model_copy(update=request.model_dump(exclude={"contracts"}))
    updated = await service.update(project, user=user)
    return _entity_to_response(updated)


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_project(
    record_id: int,
    service: ProjectService = Depends(get_project_svc),
) -> None:
    """
    Delete a project.

    Vehicles, accommodations, budgets and bills are detached; documents
    and history are deleted with it.
    """
    await service.delete(record_id)


@router.get(
    "/{record_id}/history",
    response_model=list[ProjectHistoryEntryResponse],
    responses={404: {"model": ErrorResponse}},
)
async def project_history(
    record_id: int,
    service: ProjectService = Depends(get_project_svc),
) -> list[ProjectHistoryEntryResponse]:
    """Field changes of a project, newest first."""
    entries = await service.history(record_id)
    return [ProjectHistoryEntryResponse.model_validate(e.model_dump()) for e in entries]


@router.post(
    "/{record_id}/contracts",
    response_model=DocumentSaveResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def save_contract(
    record_id: int,
    request: Request,
    file: UploadFile | None = File(default=None),
    existing_doc_id: int | None = Form(default=None),
    expires_at: str | None = Form(default=None),
    value: str | None = Form(default=None),
    description: str | None = Form(default=None),
    service: ProjectService = Depends(get_project_svc),
    settings: Settings = Depends(get_app_settings),
) -> DocumentSaveResponse:
    """
    Register a contract or update an existing one.

    A file sent for an existing contract is stored as a new contract row;
    earlier versions stay listed.
    """
    await service.get(record_id)
    if existing_doc_id is not None:
        await owned_document(service, record_id, existing_doc_id)

    form = await request.form()
    doc = await service.documents.save_contract(
        record_id,
        file=await read_upload(file, settings.api.max_upload_size),
        expires_at=form_field(form, "expires_at", expires_at, parse_form_date),
        value=form_field(form, "value", value, parse_form_value),
        description=form_field(form, "description", description),
        existing_doc_id=existing_doc_id,
    )
    if doc is None:
        return DocumentSaveResponse(saved=False)
    return DocumentSaveResponse(saved=True, document=DocumentResponse.from_entity(doc))


add_document_routes(router, get_project_svc)
