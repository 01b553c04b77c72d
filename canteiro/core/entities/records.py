"""Parent records that own typed documents."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ProjectStatus(str, Enum):
    ACTIVE = "ativa"
    COMPLETED = "concluida"
    INACTIVE = "inativa"


class EmployeeStatus(str, Enum):
    ACTIVE = "ativo"
    VACATION = "ferias"
    ON_LEAVE = "afastado"
    DISMISSED = "desligado"


class VehicleStatus(str, Enum):
    ACTIVE = "ativo"
    MAINTENANCE = "manutencao"
    INACTIVE = "inativo"


class AccommodationStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Project(BaseModel):
    """Construction project ("obra")."""

    id: int | None = None
    name: str
    tax_id: str | None = None
    address: str = ""
    city: str = ""
    state: str = ""
    client: str | None = None
    contract_value: float = 0.0
    start_date: date | None = None
    predicted_end_date: date | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return self.name


class Employee(BaseModel):
    """Employee ("colaborador")."""

    id: int | None = None
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
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return self.name


class Vehicle(BaseModel):
    """Company vehicle."""

    id: int | None = None
    brand: str = ""
    model: str = ""
    plate: str
    project_id: int | None = None
    status: VehicleStatus = VehicleStatus.ACTIVE
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        if self.model:
            return f"{self.plate} - {self.model}"
        return self.plate


class Accommodation(BaseModel):
    """Worker accommodation ("alojamento")."""

    id: int | None = None
    name: str
    address: str = ""
    city: str = ""
    state: str = ""
    project_id: int | None = None
    status: AccommodationStatus = AccommodationStatus.ACTIVE
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return self.name


class ProjectHistoryEntry(BaseModel):
    """One changed field of a project."""

    id: int | None = None
    project_id: int
    user_id: str | None = None
    field: str
    old_value: str | None = None
    new_value: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
