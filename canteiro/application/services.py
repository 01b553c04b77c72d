"""
Service factory functions for dependency injection.

Wires the SQLite and blob store implementations to the core services.
Use cases and the API layer import from here.
"""

from typing import TYPE_CHECKING

from canteiro.core.entities.document import (
    ACCOMMODATION_DOCUMENTS,
    EMPLOYEE_DOCUMENTS,
    PROJECT_DOCUMENTS,
    VEHICLE_DOCUMENTS,
    DocumentKind,
)
from canteiro.core.services import (
    AccommodationService,
    BillService,
    BudgetService,
    DocumentLifecycleService,
    EmployeeService,
    ProjectService,
    VehicleService,
)

if TYPE_CHECKING:
    from canteiro.core.interfaces import IBlobStore


async def get_document_service(
    kind: DocumentKind,
    blob_store: "IBlobStore | None" = None,
) -> DocumentLifecycleService:
    """
    Build the document lifecycle service of one kind.

    Args:
        kind: Document kind (table, parent column, allowed types)
        blob_store: Optional blob store override

    Returns:
        DocumentLifecycleService bound to the kind's row store
    """
    # Lazy import infrastructure to avoid circular imports
    from canteiro.infrastructure.storage.blob import get_blob_store
    from canteiro.infrastructure.storage.sqlite import get_document_store

    return DocumentLifecycleService(
        row_store=await get_document_store(kind),
        blob_store=blob_store or get_blob_store(),
    )


async def get_project_service() -> ProjectService:
    from canteiro.infrastructure.storage.sqlite import get_history_store, get_project_store

    return ProjectService(
        store=await get_project_store(),
        documents=await get_document_service(PROJECT_DOCUMENTS),
        history_store=await get_history_store(),
    )


async def get_employee_service() -> EmployeeService:
    from canteiro.infrastructure.storage.sqlite import get_employee_store

    return EmployeeService(
        store=await get_employee_store(),
        documents=await get_document_service(EMPLOYEE_DOCUMENTS),
    )


async def get_vehicle_service() -> VehicleService:
    from canteiro.infrastructure.storage.sqlite import get_vehicle_store

    return VehicleService(
        store=await get_vehicle_store(),
        documents=await get_document_service(VEHICLE_DOCUMENTS),
    )


async def get_accommodation_service() -> AccommodationService:
    from canteiro.infrastructure.storage.sqlite import get_accommodation_store

    return AccommodationService(
        store=await get_accommodation_store(),
        documents=await get_document_service(ACCOMMODATION_DOCUMENTS),
    )


async def get_bill_service() -> BillService:
    from canteiro.infrastructure.storage.sqlite import (
        get_accommodation_store,
        get_bill_store,
        get_employee_store,
        get_project_store,
    )

    return BillService(
        store=await get_bill_store(),
        references={
            "project_id": await get_project_store(),
            "employee_id": await get_employee_store(),
            "accommodation_id": await get_accommodation_store(),
        },
    )


async def get_budget_service() -> BudgetService:
    from canteiro.infrastructure.storage.sqlite import get_budget_store, get_project_store

    return BudgetService(
        store=await get_budget_store(),
        references={"project_id": await get_project_store()},
    )


__all__ = [
    "get_document_service",
    "get_project_service",
    "get_employee_service",
    "get_vehicle_service",
    "get_accommodation_service",
    "get_bill_service",
    "get_budget_service",
]
