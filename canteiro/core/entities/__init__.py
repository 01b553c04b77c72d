"""Core domain entities."""

from canteiro.core.entities.alert import AlertSeverity, AlertStatus
from canteiro.core.entities.document import (
    ACCOMMODATION_DOCUMENTS,
    DOCUMENT_KINDS,
    EMPLOYEE_DOCUMENTS,
    PROJECT_DOCUMENTS,
    UNSET,
    VEHICLE_DOCUMENTS,
    DocumentKind,
    DocumentSaveRequest,
    DocumentSet,
    ExpiringDocument,
    FileUpload,
    TypedDocument,
    Unset,
    get_document_kind,
)
from canteiro.core.entities.finance import (
    Bill,
    BillStatus,
    BillTotals,
    Budget,
    BudgetStatus,
)
from canteiro.core.entities.records import (
    Accommodation,
    AccommodationStatus,
    Employee,
    EmployeeStatus,
    Project,
    ProjectHistoryEntry,
    ProjectStatus,
    Vehicle,
    VehicleStatus,
)
from canteiro.core.entities.user import CAPABILITIES, Role, UserContext

__all__ = [
    # Alerts
    "AlertSeverity",
    "AlertStatus",
    # Documents
    "DocumentKind",
    "DocumentSaveRequest",
    "DocumentSet",
    "ExpiringDocument",
    "FileUpload",
    "TypedDocument",
    "Unset",
    "UNSET",
    "DOCUMENT_KINDS",
    "PROJECT_DOCUMENTS",
    "EMPLOYEE_DOCUMENTS",
    "VEHICLE_DOCUMENTS",
    "ACCOMMODATION_DOCUMENTS",
    "get_document_kind",
    # Records
    "Project",
    "ProjectStatus",
    "ProjectHistoryEntry",
    "Employee",
    "EmployeeStatus",
    "Vehicle",
    "VehicleStatus",
    "Accommodation",
    "AccommodationStatus",
    # Finance
    "Bill",
    "BillStatus",
    "BillTotals",
    "Budget",
    "BudgetStatus",
    # Users
    "Role",
    "UserContext",
    "CAPABILITIES",
]
