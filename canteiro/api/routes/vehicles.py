"""
Vehicle endpoints.
"""

from fastapi import APIRouter, Depends, status

from canteiro.api.dependencies import get_vehicle_svc, require
from canteiro.api.routes.documents import add_document_routes
from canteiro.application.dto.requests import VehicleRequest
from canteiro.application.dto.responses import ErrorResponse, VehicleResponse
from canteiro.core.entities.records import Vehicle
from canteiro.core.services import VehicleService

router = APIRouter(
    prefix="/api/vehicles",
    tags=["vehicles"],
    dependencies=[Depends(require("veiculos"))],
)


def _entity_to_response(vehicle: Vehicle) -> VehicleResponse:
    return VehicleResponse(**vehicle.model_dump(), display_name=vehicle.display_name)


@router.get("", response_model=list[VehicleResponse])
async def list_vehicles(
    limit: int = 100,
    offset: int = 0,
    service: VehicleService = Depends(get_vehicle_svc),
) -> list[VehicleResponse]:
    vehicles = await service.list_all(limit=limit, offset=offset)
    return [_entity_to_response(v) for v in vehicles]


@router.post(
    "",
    response_model=VehicleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_vehicle(
    request: VehicleRequest,
    service: VehicleService = Depends(get_vehicle_svc),
) -> VehicleResponse:
    """Create a vehicle; the plate is stored without separators, upper-cased."""
    created = await service.create(Vehicle(**request.model_dump()))
    return _entity_to_response(created)


@router.get(
    "/{record_id}",
    response_model=VehicleResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_vehicle(
    record_id: int,
    service: VehicleService = Depends(get_vehicle_svc),
) -> VehicleResponse:
    return _entity_to_response(await service.get(record_id))


@router.put(
    "/{record_id}",
    response_model=VehicleResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_vehicle(
    record_id: int,
    request: VehicleRequest,
    service: VehicleService = Depends(get_vehicle_svc),
) -> VehicleResponse:
    existing = await service.get(record_id)
    updated = await service.update(existing.model_copy(update=request.model_dump()))
    return _entity_to_response(updated)


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_vehicle(
    record_id: int,
    service: VehicleService = Depends(get_vehicle_svc),
) -> None:
    await service.delete(record_id)


add_document_routes(router, get_vehicle_svc)
