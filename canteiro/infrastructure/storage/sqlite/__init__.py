"""SQLite storage implementations."""

from canteiro.core.entities.document import DocumentKind
from canteiro.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    set_pool,
)
from canteiro.infrastructure.storage.sqlite.document_store import SQLiteDocumentStore
from canteiro.infrastructure.storage.sqlite.record_stores import (
    SQLiteAccommodationStore,
    SQLiteBillStore,
    SQLiteBudgetStore,
    SQLiteEmployeeStore,
    SQLiteHistoryStore,
    SQLiteProjectStore,
    SQLiteRecordStore,
    SQLiteVehicleStore,
)

# Singleton instances
_document_stores: dict[str, SQLiteDocumentStore] = {}
_project_store: SQLiteProjectStore | None = None
_employee_store: SQLiteEmployeeStore | None = None
_vehicle_store: SQLiteVehicleStore | None = None
_accommodation_store: SQLiteAccommodationStore | None = None
_history_store: SQLiteHistoryStore | None = None
_bill_store: SQLiteBillStore | None = None
_budget_store: SQLiteBudgetStore | None = None


async def get_document_store(kind: DocumentKind) -> SQLiteDocumentStore:
    """Get the singleton document store of a kind."""
    store = _document_stores.get(kind.name)
    if store is None:
        store = _document_stores[kind.name] = SQLiteDocumentStore(kind)
    return store


async def get_project_store() -> SQLiteProjectStore:
    global _project_store
    if _project_store is None:
        _project_store = SQLiteProjectStore()
    return _project_store


async def get_employee_store() -> SQLiteEmployeeStore:
    global _employee_store
    if _employee_store is None:
        _employee_store = SQLiteEmployeeStore()
    return _employee_store


async def get_vehicle_store() -> SQLiteVehicleStore:
    global _vehicle_store
    if _vehicle_store is None:
        _vehicle_store = SQLiteVehicleStore()
    return _vehicle_store


async def get_accommodation_store() -> SQLiteAccommodationStore:
    global _accommodation_store
    if _accommodation_store is None:
        _accommodation_store = SQLiteAccommodationStore()
    return _accommodation_store


async def get_history_store() -> SQLiteHistoryStore:
    global _history_store
    if _history_store is None:
        _history_store = SQLiteHistoryStore()
    return _history_store


async def get_bill_store() -> SQLiteBillStore:
    global _bill_store
    if _bill_store is None:
        _bill_store = SQLiteBillStore()
    return _bill_store


async def get_budget_store() -> SQLiteBudgetStore:
    global _budget_store
    if _budget_store is None:
        _budget_store = SQLiteBudgetStore()
    return _budget_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "set_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteDocumentStore",
    "SQLiteRecordStore",
    "SQLiteProjectStore",
    "SQLiteEmployeeStore",
    "SQLiteVehicleStore",
    "SQLiteAccommodationStore",
    "SQLiteHistoryStore",
    "SQLiteBillStore",
    "SQLiteBudgetStore",
    # Factory functions
    "get_document_store",
    "get_project_store",
    "get_employee_store",
    "get_vehicle_store",
    "get_accommodation_store",
    "get_history_store",
    "get_bill_store",
    "get_budget_store",
]
