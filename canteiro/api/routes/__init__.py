"""API route modules."""

from canteiro.api.routes.accommodations import router as accommodations_router
from canteiro.api.routes.alerts import router as alerts_router
from canteiro.api.routes.bills import router as bills_router
from canteiro.api.routes.budgets import router as budgets_router
from canteiro.api.routes.employees import router as employees_router
from canteiro.api.routes.health import router as health_router
from canteiro.api.routes.projects import router as projects_router
from canteiro.api.routes.validation import router as validation_router
from canteiro.api.routes.vehicles import router as vehicles_router

__all__ = [
    "health_router",
    "validation_router",
    "projects_router",
    "employees_router",
    "vehicles_router",
    "accommodations_router",
    "bills_router",
    "budgets_router",
    "alerts_router",
]
