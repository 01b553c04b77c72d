"""
Employee ("colaborador") endpoints.
"""

from fastapi import APIRouter, Depends, status

from canteiro.api.dependencies import get_employee_svc, require
from canteiro.api.routes.documents import add_document_routes
from canteiro.application.dto.requests import EmployeeRequest
from canteiro.application.dto.responses import EmployeeResponse, ErrorResponse
from canteiro.core.entities.records import Employee
from canteiro.core.services import EmployeeService

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
    dependencies=[Depends(require("colaboradores"))],
)


def _entity_to_response(employee: Employee) -> EmployeeResponse:
    return EmployeeResponse.model_validate(employee.model_dump())


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    limit: int = 100,
    offset: int = 0,
    service: EmployeeService = Depends(get_employee_svc),
) -> list[EmployeeResponse]:
    employees = await service.list_all(limit=limit, offset=offset)
    return [_entity_to_response(e) for e in employees]


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_employee(
    request: EmployeeRequest,
    service: EmployeeService = Depends(get_employee_svc),
) -> EmployeeResponse:
    created = await service.create(Employee(**request.model_dump()))
    return _entity_to_response(created)


@router.get(
    "/{record_id}",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_employee(
    record_id: int,
    service: EmployeeService = Depends(get_employee_svc),
) -> EmployeeResponse:
    return _entity_to_response(await service.get(record_id))


@router.put(
    "/{record_id}",
    response_model=EmployeeResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_employee(
    record_id: int,
    request: EmployeeRequest,
    service: EmployeeService = Depends(get_employee_svc),
) -> EmployeeResponse:
    existing = await service.get(record_id)
    updated = await service.update(existing.model_copy(update=request.model_dump()))
    return _entity_to_response(updated)


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_employee(
    record_id: int,
    service: EmployeeService = Depends(get_employee_svc),
) -> None:
    """Delete an employee and their documents; bills keep the row without the link."""
    await service.delete(record_id)


add_document_routes(router, get_employee_svc)
