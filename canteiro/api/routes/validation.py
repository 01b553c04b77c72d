"""
Validation endpoints used by the record forms.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from canteiro.api.dependencies import require_user
from canteiro.application.dto.responses import (
    AlertStatusResponse,
    PlateValidationResponse,
    TaxIdValidationResponse,
)
from canteiro.core.services import (
    format_tax_id,
    get_alert_status,
    normalize_plate,
    validate_tax_id,
    validate_vehicle_plate,
)

router = APIRouter(
    prefix="/api/validation",
    tags=["validation"],
    dependencies=[Depends(require_user)],
)


@router.get("/tax-id", response_model=TaxIdValidationResponse)
async def check_tax_id(value: str = Query("", description="CNPJ to check")) -> TaxIdValidationResponse:
    """Check CNPJ digits and return the masked form."""
    return TaxIdValidationResponse(valid=validate_tax_id(value), formatted=format_tax_id(value))


@router.get("/plate", response_model=PlateValidationResponse)
async def check_plate(value: str = Query("", description="Vehicle plate")) -> PlateValidationResponse:
    return PlateValidationResponse(
        valid=validate_vehicle_plate(value),
        normalized=normalize_plate(value),
    )


@router.get("/alert-status", response_model=AlertStatusResponse)
async def alert_status(
    date_value: str | None = Query(None, alias="date", description="Expiry date (YYYY-MM-DD)"),
    today: date | None = Query(None, description="Reference day, defaults to the current date"),
) -> AlertStatusResponse:
    """Badge for an expiry date; unreadable dates are neutral."""
    return AlertStatusResponse.from_status(get_alert_status(date_value, today=today))
