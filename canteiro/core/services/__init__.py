"""
Core business logic services.

Layer-pure services that depend only on:
- canteiro/core/entities/*
- canteiro/core/interfaces/*
- canteiro/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from canteiro.core.services.authorization import can_access, require_capability
from canteiro.core.services.document_lifecycle import (
    DocumentLifecycleService,
    describe_contract,
)
from canteiro.core.services.finance import (
    BillService,
    BudgetService,
    FinancialEntryService,
)
from canteiro.core.services.records import (
    AccommodationService,
    EmployeeService,
    ProjectService,
    RecordService,
    VehicleService,
)
from canteiro.core.services.validation import (
    BR_STATES,
    WARNING_WINDOW_DAYS,
    days_until,
    format_currency,
    format_currency_compact,
    format_tax_id,
    get_alert_status,
    is_valid_date,
    is_valid_state,
    normalize_plate,
    parse_date,
    safe_format,
    validate_tax_id,
    validate_vehicle_plate,
)

__all__ = [
    # Validation & status
    "BR_STATES",
    "WARNING_WINDOW_DAYS",
    "days_until",
    "format_currency",
    "format_currency_compact",
    "format_tax_id",
    "get_alert_status",
    "is_valid_date",
    "is_valid_state",
    "normalize_plate",
    "parse_date",
    "safe_format",
    "validate_tax_id",
    "validate_vehicle_plate",
    # Authorization
    "can_access",
    "require_capability",
    # Documents
    "DocumentLifecycleService",
    "describe_contract",
    # Finance
    "FinancialEntryService",
    "BillService",
    "BudgetService",
    # Records
    "RecordService",
    "ProjectService",
    "EmployeeService",
    "VehicleService",
    "AccommodationService",
]
