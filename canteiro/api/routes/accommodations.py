"""
Accommodation ("alojamento") endpoints.
"""

from fastapi import APIRouter, Depends, status

from canteiro.api.dependencies import get_accommodation_svc, require
from canteiro.api.routes.documents import add_document_routes
from canteiro.application.dto.requests import AccommodationRequest
from canteiro.application.dto.responses import AccommodationResponse, ErrorResponse
from canteiro.core.entities.records import Accommodation
from canteiro.core.services import AccommodationService

router = APIRouter(
    prefix="/api/accommodations",
    tags=["accommodations"],
    dependencies=[Depends(require("alojamento"))],
)


def _entity_to_response(accommodation: Accommodation) -> AccommodationResponse:
    return AccommodationResponse.model_validate(accommodation.model_dump())


@router.get("", response_model=list[AccommodationResponse])
async def list_accommodations(
    limit: int = 100,
    offset: int = 0,
    service: AccommodationService = Depends(get_accommodation_svc),
) -> list[AccommodationResponse]:
    accommodations = await service.list_all(limit=limit, offset=offset)
    return [_entity_to_response(a) for a in accommodations]


@router.post(
    "",
    response_model=AccommodationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_accommodation(
    request: AccommodationRequest,
    service: AccommodationService = Depends(get_accommodation_svc),
) -> AccommodationResponse:
    created = await service.create(Accommodation(**request.model_dump()))
    return _entity_to_response(created)


@router.get(
    "/{record_id}",
    response_model=AccommodationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_accommodation(
    record_id: int,
    service: AccommodationService = Depends(get_accommodation_svc),
) -> AccommodationResponse:
    return _entity_to_response(await service.get(record_id))


@router.put(
    "/{record_id}",
    response_model=AccommodationResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_accommodation(
    record_id: int,
    request: AccommodationRequest,
    service: AccommodationService = Depends(get_accommodation_svc),
) -> AccommodationResponse:
    existing = await service.get(record_id)
    updated = await service.update(existing.model_copy(update=request.model_dump()))
    return _entity_to_response(updated)


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_accommodation(
    record_id: int,
    service: AccommodationService = Depends(get_accommodation_svc),
) -> None:
    """Delete an accommodation with its documents and bills."""
    await service.delete(record_id)


add_document_routes(router, get_accommodation_svc)
