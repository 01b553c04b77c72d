"""
Client budget ("orçamento") endpoints.
"""

from fastapi import APIRouter, Depends, status

from canteiro.api.dependencies import get_budget_svc, require
from canteiro.application.dto.requests import BudgetRequest
from canteiro.application.dto.responses import BudgetResponse, ErrorResponse
from canteiro.core.entities.finance import Budget
from canteiro.core.services import BudgetService

router = APIRouter(
    prefix="/api/budgets",
    tags=["budgets"],
    dependencies=[Depends(require("orcamentos"))],
)


@router.get("", response_model=list[BudgetResponse])
async def list_budgets(
    limit: int = 100,
    offset: int = 0,
    service: BudgetService = Depends(get_budget_svc),
) -> list[BudgetResponse]:
    budgets = await service.list_all(limit=limit, offset=offset)
    return [BudgetResponse.from_entity(b) for b in budgets]


@router.post(
    "",
    response_model=BudgetResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_budget(
    request: BudgetRequest,
    service: BudgetService = Depends(get_budget_svc),
) -> BudgetResponse:
    """Create a budget; without a code the next one of the year is assigned."""
    created = await service.create(Budget(**request.model_dump()))
    return BudgetResponse.from_entity(created)


@router.get(
    "/{record_id}",
    response_model=BudgetResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_budget(
    record_id: int,
    service: BudgetService = Depends(get_budget_svc),
) -> BudgetResponse:
    return BudgetResponse.from_entity(await service.get(record_id))


@router.put(
    "/{record_id}",
    response_model=BudgetResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_budget(
    record_id: int,
    request: BudgetRequest,
    service: BudgetService = Depends(get_budget_svc),
) -> BudgetResponse:
    existing = await service.get(record_id)
    changes = request.model_dump()
    # A blank code keeps the one already assigned
    if not changes["code"]:
        del changes["code"]
    updated = await service.update(existing.model_copy(update=changes))
    return BudgetResponse.from_entity(updated)


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_budget(
    record_id: int,
    service: BudgetService = Depends(get_budget_svc),
) -> None:
    await service.delete(record_id)
