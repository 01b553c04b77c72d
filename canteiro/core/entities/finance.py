"""Financial entries that reference parent records: bills and budgets."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class BillStatus(str, Enum):
    PENDING = "pendente"
    PAID = "pago"
    OVERDUE = "vencido"
    CANCELLED = "cancelado"


class BudgetStatus(str, Enum):
    DRAFT = "rascunho"
    SENT = "enviado"
    APPROVED = "aprovado"
    REJECTED = "rejeitado"
    PENDING = "pendente"


class Bill(BaseModel):
    """Account payable ("conta a pagar"), optionally tied to a project, employee or accommodation."""

    id: int | None = None
    description: str
    amount: float = 0.0
    due_date: date | None = None
    status: BillStatus = BillStatus.PENDING
    paid_date: date | None = None
    category: str = "Geral"
    project_id: int | None = None
    employee_id: int | None = None
    accommodation_id: int | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return self.description

    def is_overdue(self, today: date | None = None) -> bool:
        """Unpaid and past its due date."""
        if self.status not in (BillStatus.PENDING, BillStatus.OVERDUE):
            return False
        if self.due_date is None:
            return False
        return self.due_date < (today or date.today())


class Budget(BaseModel):
    """Quote sent to a client ("orçamento"), coded ORC-{year}-{seq}."""

    id: int | None = None
    code: str | None = None
    client: str = ""
    tax_id: str | None = None
    description: str = ""
    amount: float = 0.0
    status: BudgetStatus = BudgetStatus.PENDING
    project_id: int | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        if self.code and self.client:
            return f"{self.code} - {self.client}"
        return self.code or self.client or f"Orçamento {self.id}"


@dataclass
class BillTotals:
    """Bill count and amount per status."""

    counts: dict[BillStatus, int] = field(default_factory=dict)
    amounts: dict[BillStatus, float] = field(default_factory=dict)

    @property
    def open_amount(self) -> float:
        return sum(
            self.amounts.get(s, 0.0) for s in (BillStatus.PENDING, BillStatus.OVERDUE)
        )
