"""
Dependency injection container for FastAPI.

Provides services, use cases and the acting user to route handlers.
"""

from collections.abc import Callable
from functools import lru_cache

from fastapi import Depends, Header

from canteiro.application.services import (
    get_accommodation_service,
    get_bill_service,
    get_budget_service,
    get_employee_service,
    get_project_service,
    get_vehicle_service,
)
from canteiro.application.use_cases import ListExpiringDocumentsUseCase
from canteiro.config import Settings, get_settings
from canteiro.core.entities.user import Role, UserContext
from canteiro.core.exceptions import PermissionDeniedError
from canteiro.core.services import (
    AccommodationService,
    BillService,
    BudgetService,
    EmployeeService,
    ProjectService,
    VehicleService,
    require_capability,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Acting user
def get_current_user(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
    x_user_permissions: str | None = Header(default=None),
) -> UserContext | None:
    """
    Build the user context from request headers.

    X-User-Permissions is a comma-separated list of capability keys.
    Requests without X-User-Id are anonymous.
    """
    if not x_user_id:
        return None

    try:
        role = Role((x_user_role or "").strip().lower())
    except ValueError:
        role = Role.SUB_USER

    keys = [k.strip() for k in (x_user_permissions or "").split(",")]
    return UserContext(
        user_id=x_user_id,
        role=role,
        permissions={k: True for k in keys if k},
    )


def require_user(user: UserContext | None = Depends(get_current_user)) -> UserContext:
    """Any identified user."""
    if user is None:
        raise PermissionDeniedError(None, "authenticated")
    return user


@lru_cache
def require(capability: str) -> Callable[..., UserContext]:
    """Dependency that admits only users holding ``capability``."""

    def _check(user: UserContext | None = Depends(get_current_user)) -> UserContext:
        return require_capability(user, capability)

    _check.__name__ = f"require_{capability}"
    return _check


# Service dependencies
async def get_project_svc() -> ProjectService:
    return await get_project_service()


async def get_employee_svc() -> EmployeeService:
    return await get_employee_service()


async def get_vehicle_svc() -> VehicleService:
    return await get_vehicle_service()


async def get_accommodation_svc() -> AccommodationService:
    return await get_accommodation_service()


async def get_bill_svc() -> BillService:
    return await get_bill_service()


async def get_budget_svc() -> BudgetService:
    return await get_budget_service()


# Use case dependencies
def get_list_expiring_documents_use_case() -> ListExpiringDocumentsUseCase:
    """Get list expiring documents use case."""
    return ListExpiringDocumentsUseCase()
