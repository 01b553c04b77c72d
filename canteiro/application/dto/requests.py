"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation. Document uploads are
multipart forms and are parsed in the route handlers instead.
"""

from datetime import date

from pydantic import BaseModel, Field

from canteiro.core.entities.finance import BillStatus, BudgetStatus
from canteiro.core.entities.records import (
    AccommodationStatus,
    EmployeeStatus,
    ProjectStatus,
    VehicleStatus,
)


class ContractRequest(BaseModel):
    """Contract registered without a file (the file can be attached later)."""

    description: str | None = Field(default=None, description="Free-text description")
    expires_at: date | None = Field(default=None, description="Contract end date")
    value: float | None = Field(default=None, ge=0, description="Contract value in BRL")


class ProjectRequest(BaseModel):
    """Create or replace a project."""

    name: str = Field(..., min_length=1, description="Project name")
    tax_id: str | None = Field(
        default=None,
        description="CNPJ, with or without punctuation",
        examples=["11.222.333/0001-81"],
    )
    address: str = Field(default="", description="Street address")
    city: str = Field(default="", description="City")
    state: str = Field(default="", max_length=2, description="Two-letter state code")
    client: str | None = Field(default=None, description="Client name")
    contract_value: float = Field(default=0.0, ge=0, description="Total contract value")
    start_date: date | None = Field(default=None, description="Start date")
    predicted_end_date: date | None = Field(default=None, description="Planned end date")
    status: ProjectStatus = Field(default=ProjectStatus.ACTIVE, description="Project status")
    contracts: list[ContractRequest] = Field(
        default_factory=list,
        description="Contracts to register on creation (ignored on update)",
    )


class EmployeeRequest(BaseModel):
    """Create or replace an employee."""

    name: str = Field(..., min_length=1, description="Full name")
    cpf: str | None = Field(default=None, description="CPF")
    role: str = Field(default="", description="Job role")
    phone: str = Field(default="", description="Phone number")
    email: str = Field(default="", description="E-mail")
    city: str = Field(default="", description="City")
    state: str = Field(default="", max_length=2, description="Two-letter state code")
    salary: float = Field(default=0.0, ge=0, description="Monthly salary")
    admission_date: date | None = None
    dismissal_date: date | None = None
    vacation_due_date: date | None = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE


class VehicleRequest(BaseModel):
    """Create or replace a vehicle."""

    brand: str = Field(default="", description="Manufacturer")
    model: str = Field(default="", description="Model")
    plate: str = Field(..., description="Mercosul plate", examples=["BRA1B23"])
    project_id: int | None = Field(default=None, description="Project the vehicle serves")
    status: VehicleStatus = VehicleStatus.ACTIVE


class AccommodationRequest(BaseModel):
    """Create or replace an accommodation."""

    name: str = Field(..., min_length=1, description="Accommodation name")
    address: str = Field(default="", description="Street address")
    city: str = Field(default="", description="City")
    state: str = Field(default="", max_length=2, description="Two-letter state code")
    project_id: int | None = Field(default=None, description="Project it houses workers for")
    status: AccommodationStatus = AccommodationStatus.ACTIVE


class BillRequest(BaseModel):
    """Create or replace an account payable."""

    description: str = Field(..., min_length=1, description="What is being paid")
    amount: float = Field(default=0.0, ge=0, description="Amount in BRL")
    due_date: date | None = Field(default=None, description="Due date")
    status: BillStatus = BillStatus.PENDING
    paid_date: date | None = Field(default=None, description="Defaults to today when paid")
    category: str = Field(default="Geral", description="Expense category")
    project_id: int | None = None
    employee_id: int | None = None
    accommodation_id: int | None = None


class BudgetRequest(BaseModel):
    """Create or replace a client budget."""

    code: str | None = Field(
        default=None,
        description="Budget code; the next ORC-{year}-{seq} is assigned when omitted",
    )
    client: str = Field(..., min_length=1, description="Client name")
    tax_id: str | None = Field(default=None, description="Client CNPJ")
    description: str = ""
    amount: float = Field(default=0.0, ge=0, description="Quoted amount in BRL")
    status: BudgetStatus = BudgetStatus.PENDING
    project_id: int | None = Field(default=None, description="Project the budget became")
