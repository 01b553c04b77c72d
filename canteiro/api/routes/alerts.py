"""
Dashboard alert endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from canteiro.api.dependencies import get_list_expiring_documents_use_case, require
from canteiro.application.dto.responses import (
    ExpiringDocumentResponse,
    ExpiringDocumentsResponse,
)
from canteiro.application.use_cases import ListExpiringDocumentsUseCase

router = APIRouter(
    prefix="/api/alerts",
    tags=["alerts"],
    dependencies=[Depends(require("dashboard"))],
)


@router.get("/expiring-documents", response_model=ExpiringDocumentsResponse)
async def expiring_documents(
    within_days: int | None = Query(None, ge=0, description="Look-ahead window in days"),
    today: date | None = Query(None, description="Reference day, defaults to the current date"),
    use_case: ListExpiringDocumentsUseCase = Depends(get_list_expiring_documents_use_case),
) -> ExpiringDocumentsResponse:
    """
    Documents of every record type that have an expiry date.

    Expired first, then those inside the warning window, then the rest;
    soonest expiry first within each group.
    """
    result = await use_case.execute(within_days=within_days, today=today)
    return ExpiringDocumentsResponse(
        documents=[ExpiringDocumentResponse.from_entity(r, today=today) for r in result.documents],
        total=result.total,
        counts=result.counts,
    )
