"""Data transfer objects between the API and application layers."""

from canteiro.application.dto.requests import (
    AccommodationRequest,
    BillRequest,
    BudgetRequest,
    ContractRequest,
    EmployeeRequest,
    ProjectRequest,
    VehicleRequest,
)
from canteiro.application.dto.responses import (
    AccommodationResponse,
    AlertStatusResponse,
    BillResponse,
    BillSummaryResponse,
    BudgetResponse,
    DocumentResponse,
    DocumentSaveResponse,
    DocumentSetResponse,
    EmployeeResponse,
    ErrorResponse,
    ExpiringDocumentResponse,
    ExpiringDocumentsResponse,
    HealthResponse,
    PlateValidationResponse,
    ProjectHistoryEntryResponse,
    ProjectResponse,
    TaxIdValidationResponse,
    VehicleResponse,
)

__all__ = [
    # Requests
    "ProjectRequest",
    "ContractRequest",
    "EmployeeRequest",
    "VehicleRequest",
    "AccommodationRequest",
    "BillRequest",
    "BudgetRequest",
    # Responses
    "AlertStatusResponse",
    "DocumentResponse",
    "DocumentSaveResponse",
    "DocumentSetResponse",
    "ProjectResponse",
    "EmployeeResponse",
    "VehicleResponse",
    "AccommodationResponse",
    "BillResponse",
    "BillSummaryResponse",
    "BudgetResponse",
    "ProjectHistoryEntryResponse",
    "ExpiringDocumentResponse",
    "ExpiringDocumentsResponse",
    "TaxIdValidationResponse",
    "PlateValidationResponse",
    "HealthResponse",
    "ErrorResponse",
]
