"""
Accounts payable ("contas a pagar") endpoints.
"""

from fastapi import APIRouter, Depends, status

from canteiro.api.dependencies import get_bill_svc, require
from canteiro.application.dto.requests import BillRequest
from canteiro.application.dto.responses import (
    BillResponse,
    BillSummaryResponse,
    ErrorResponse,
)
from canteiro.core.entities.finance import Bill
from canteiro.core.services import BillService

router = APIRouter(
    prefix="/api/bills",
    tags=["bills"],
    dependencies=[Depends(require("contas_pagar"))],
)


@router.get("", response_model=list[BillResponse])
async def list_bills(
    limit: int = 100,
    offset: int = 0,
    service: BillService = Depends(get_bill_svc),
) -> list[BillResponse]:
    """List bills by due date, undated ones last."""
    bills = await service.list_all(limit=limit, offset=offset)
    return [BillResponse.from_entity(b) for b in bills]


@router.get("/summary", response_model=BillSummaryResponse)
async def bill_summary(
    service: BillService = Depends(get_bill_svc),
) -> BillSummaryResponse:
    """Count and total per status."""
    return BillSummaryResponse.from_totals(await service.totals())


@router.post(
    "",
    response_model=BillResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_bill(
    request: BillRequest,
    service: BillService = Depends(get_bill_svc),
) -> BillResponse:
    created = await service.create(Bill(**request.model_dump()))
    return BillResponse.from_entity(created)


@router.get(
    "/{record_id}",
    response_model=BillResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_bill(
    record_id: int,
    service: BillService = Depends(get_bill_svc),
) -> BillResponse:
    return BillResponse.from_entity(await service.get(record_id))


@router.put(
    "/{record_id}",
    response_model=BillResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_bill(
    record_id: int,
    request: BillRequest,
    service: BillService = Depends(get_bill_svc),
) -> BillResponse:
    """Replace a bill; marking it paid without a payment date uses today."""
    existing = await service.get(record_id)
    updated = await service.update(existing.model_copy(update=request.model_dump()))
    return BillResponse.from_entity(updated)


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_bill(
    record_id: int,
    service: BillService = Depends(get_bill_svc),
) -> None:
    await service.delete(record_id)
