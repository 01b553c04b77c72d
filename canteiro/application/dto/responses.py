"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from canteiro.core.entities.alert import AlertStatus
from canteiro.core.entities.document import DocumentSet, ExpiringDocument, TypedDocument
from canteiro.core.entities.finance import (
    Bill,
    BillStatus,
    BillTotals,
    Budget,
    BudgetStatus,
)
from canteiro.core.entities.records import (
    AccommodationStatus,
    EmployeeStatus,
    Project,
    ProjectStatus,
    VehicleStatus,
)
from canteiro.core.services.validation import (
    format_currency,
    format_currency_compact,
    safe_format,
)


class AlertStatusResponse(BaseModel):
    """Expiry badge."""

    severity: str = Field(..., description="expired, warning, ok or neutral")
    label: str = Field(..., description="Badge text")
    color: str = Field(..., description="Text color class")
    bg: str = Field(..., description="Background class")
    border: str = Field(..., description="Border class")

    @classmethod
    def from_status(cls, status: AlertStatus) -> "AlertStatusResponse":
        return cls(
            severity=status.severity.value,
            label=status.label,
            color=status.color,
            bg=status.bg,
            border=status.border,
        )


class DocumentResponse(BaseModel):
    """Typed document with its computed badge."""

    id: int = Field(..., description="Document ID")
    parent_id: int = Field(..., description="Owning record ID")
    kind: str = Field(..., description="project, employee, vehicle or accommodation")
    doc_type: str = Field(..., description="Document type")
    description: str | None = None
    file_name: str | None = Field(default=None, description="Original file name")
    blob_url: str | None = Field(default=None, description="Public URL of the file")
    display_name: str = Field(..., description="File name or no-attachment label")
    uploaded_at: datetime
    expires_at: date | None = None
    value: float | None = None
    value_formatted: str | None = Field(default=None, description="Value as R$ 1.234,56")
    expires_at_display: str = Field(default="N/A", description="Expiry as dd/mm/yyyy")
    alert: AlertStatusResponse = Field(..., description="Expiry badge")

    @classmethod
    def from_entity(cls, doc: TypedDocument, today: date | None = None) -> "DocumentResponse":
        return cls(
            id=doc.id or 0,
            parent_id=doc.parent_id,
            kind=doc.kind,
            doc_type=doc.doc_type,
            description=doc.description,
            file_name=doc.file_name,
            blob_url=doc.blob_url,
            display_name=doc.display_name,
            uploaded_at=doc.uploaded_at,
            expires_at=doc.expires_at,
            value=doc.value,
            value_formatted=format_currency(doc.value) if doc.value is not None else None,
            expires_at_display=safe_format(doc.expires_at),
            alert=AlertStatusResponse.from_status(doc.alert_status(today=today)),
        )


class DocumentSetResponse(BaseModel):
    """Documents of one record: fixed slots plus accumulated contracts."""

    slots: dict[str, DocumentResponse] = Field(default_factory=dict)
    contracts: list[DocumentResponse] = Field(default_factory=list)

    @classmethod
    def from_set(cls, doc_set: DocumentSet) -> "DocumentSetResponse":
        return cls(
            slots={k: DocumentResponse.from_entity(d) for k, d in doc_set.slots.items()},
            contracts=[DocumentResponse.from_entity(d) for d in doc_set.contracts],
        )


class DocumentSaveResponse(BaseModel):
    """Outcome of a document save; nothing is written when there was nothing to save."""

    saved: bool
    document: DocumentResponse | None = None


class ProjectResponse(BaseModel):
    id: int
    name: str
    tax_id: str | None = None
    address: str = ""
    city: str = ""
    state: str = ""
    client: str | None = None
    contract_value: float = 0.0
    start_date: date | None = None
    predicted_end_date: date | None = None
    status: ProjectStatus
    created_at: datetime
    contract_value_formatted: str = ""

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            **project.model_dump(),
            contract_value_formatted=format_currency(project.contract_value),
        )


class EmployeeResponse(BaseModel):
    id: int
    name: str
    cpf: str | None = None
    role: str = ""
    phone: str = ""
    email: str = ""
    city: str = ""
    state: str = ""
    salary: float = 0.0
    admission_date: date | None = None
    dismissal_date: date | None = None
    vacation_due_date: date | None = None
    status: EmployeeStatus
    created_at: datetime


class VehicleResponse(BaseModel):
    id: int
    brand: str = ""
    model: str = ""
    plate: str
    display_name: str
    project_id: int | None = None
    status: VehicleStatus
    created_at: datetime


class AccommodationResponse(BaseModel):
    id: int
    name: str
    address: str = ""
    city: str = ""
    state: str = ""
    project_id: int | None = None
    status: AccommodationStatus
    created_at: datetime


class BillResponse(BaseModel):
    id: int
    description: str
    amount: float
    amount_formatted: str
    due_date: date | None = None
    due_date_display: str = "N/A"
    status: BillStatus
    paid_date: date | None = None
    category: str = "Geral"
    overdue: bool = Field(default=False, description="Unpaid and past its due date")
    project_id: int | None = None
    employee_id: int | None = None
    accommodation_id: int | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, bill: Bill, today: date | None = None) -> "BillResponse":
        return cls(
            **bill.model_dump(),
            amount_formatted=format_currency(bill.amount),
            due_date_display=safe_format(bill.due_date),
            overdue=bill.is_overdue(today=today),
        )


class BillSummaryResponse(BaseModel):
    """Bill count and amount per status."""

    counts: dict[str, int] = Field(default_factory=dict)
    amounts: dict[str, float] = Field(default_factory=dict)
    open_amount: float = Field(default=0.0, description="Pending plus overdue")
    open_amount_compact: str = Field(default="R$ 0,00", description="Dashboard label")

    @classmethod
    def from_totals(cls, totals: BillTotals) -> "BillSummaryResponse":
        return cls(
            counts={s.value: totals.counts.get(s, 0) for s in BillStatus},
            amounts={s.value: totals.amounts.get(s, 0.0) for s in BillStatus},
            open_amount=totals.open_amount,
            open_amount_compact=format_currency_compact(totals.open_amount),
        )


class BudgetResponse(BaseModel):
    id: int
    code: str | None = None
    client: str
    tax_id: str | None = None
    description: str = ""
    amount: float
    amount_formatted: str
    status: BudgetStatus
    display_name: str
    project_id: int | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, budget: Budget) -> "BudgetResponse":
        return cls(
            **budget.model_dump(),
            amount_formatted=format_currency(budget.amount),
            display_name=budget.display_name,
        )


class ProjectHistoryEntryResponse(BaseModel):
    id: int
    project_id: int
    user_id: str | None = None
    field: str
    old_value: str | None = None
    new_value: str | None = None
    created_at: datetime


class ExpiringDocumentResponse(BaseModel):
    """Dashboard alert row."""

    document: DocumentResponse
    category: str = Field(..., description="Obra, Colaborador, Veículo or Alojamento")
    parent_name: str = Field(..., description="Display name of the owning record")
    status: AlertStatusResponse
    days_left: int | None = Field(default=None, description="Days until expiry")

    @classmethod
    def from_entity(
        cls, row: ExpiringDocument, today: date | None = None
    ) -> "ExpiringDocumentResponse":
        return cls(
            document=DocumentResponse.from_entity(row.document, today=today),
            category=row.category,
            parent_name=row.parent_name,
            status=AlertStatusResponse.from_status(row.status),
            days_left=row.days_left,
        )


class ExpiringDocumentsResponse(BaseModel):
    documents: list[ExpiringDocumentResponse] = Field(default_factory=list)
    total: int = 0
    counts: dict[str, int] = Field(default_factory=dict, description="Rows per severity")


class TaxIdValidationResponse(BaseModel):
    valid: bool
    formatted: str


class PlateValidationResponse(BaseModel):
    valid: bool
    normalized: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status (healthy/degraded)")
    version: str = Field(..., description="Application version")
    database: str = Field(..., description="Database status")
    blob_storage: str = Field(..., description="Blob storage status")
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. RECORD_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
