"""
Financial entry services.

Bills and budgets are not parents of documents; they only point at
projects, employees or accommodations. References are checked here so a
dangling id is reported as a validation error instead of a database
failure.
"""

import re
from datetime import date
from typing import Generic, TypeVar

from canteiro.config import get_logger
from canteiro.core.entities.finance import Bill, BillStatus, BillTotals, Budget
from canteiro.core.exceptions import (
    InvalidTaxIdError,
    RecordNotFoundError,
    ValidationError,
)
from canteiro.core.interfaces.storage import IBillStore, IBudgetStore, IRecordStore
from canteiro.core.services.validation import format_tax_id, validate_tax_id

logger = get_logger(__name__)

E = TypeVar("E", Bill, Budget)

BUDGET_CODE_PREFIX = "ORC"


class FinancialEntryService(Generic[E]):
    """CRUD for one kind of financial entry."""

    def __init__(
        self,
        store: IRecordStore[E],
        references: dict[str, IRecordStore] | None = None,
    ):
        self._store = store
        # entry field -> store of the record it points at
        self._references = references or {}

    @property
    def entity(self) -> str:
        return self._store.entity

    def validate(self, entry: E) -> E:
        if entry.amount < 0:
            raise ValidationError(
                field="amount", message="Amount cannot be negative", value=entry.amount
            )
        return entry

    async def _check_references(self, entry: E) -> None:
        for field_name, store in self._references.items():
            ref = getattr(entry, field_name)
            if ref is not None and await store.get(ref) is None:
                raise ValidationError(
                    field=field_name,
                    message=f"Unknown {store.entity}",
                    value=ref,
                )

    async def create(self, entry: E) -> E:
        entry = self.validate(entry)
        await self._check_references(entry)
        created = await self._store.create(entry)
        logger.info(f"{self.entity}_created", record_id=created.id, amount=created.amount)
        return created

    async def get(self, entry_id: int) -> E:
        entry = await self._store.get(entry_id)
        if entry is None:
            raise RecordNotFoundError(self.entity, entry_id)
        return entry

    async def list_all(self, limit: int = 100, offset: int = 0) -> list[E]:
        return await self._store.list_all(limit=limit, offset=offset)

    async def update(self, entry: E) -> E:
        if entry.id is None:
            raise ValueError(f"Cannot update {self.entity} without an id")
        await self.get(entry.id)
        entry = self.validate(entry)
        await self._check_references(entry)
        updated = await self._store.update(entry)
        logger.info(f"{self.entity}_updated", record_id=entry.id)
        return updated

    async def delete(self, entry_id: int) -> None:
        await self.get(entry_id)
        if not await self._store.delete(entry_id):
            raise RecordNotFoundError(self.entity, entry_id)
        logger.info(f"{self.entity}_deleted", record_id=entry_id)


class BillService(FinancialEntryService[Bill]):
    """Accounts payable."""

    def __init__(
        self,
        store: IBillStore,
        references: dict[str, IRecordStore] | None = None,
    ):
        super().__init__(store, references)
        self._bills = store

    def validate(self, entry: Bill) -> Bill:
        entry = super().validate(entry)
        if not entry.description.strip():
            raise ValidationError(field="description", message="Description is required")

        # Back to pending forgets the payment; paid without a date means today
        if entry.status == BillStatus.PENDING:
            return entry.model_copy(update={"paid_date": None})
        if entry.status == BillStatus.PAID and entry.paid_date is None:
            return entry.model_copy(update={"paid_date": date.today()})
        return entry

    async def totals(self) -> BillTotals:
        return await self._bills.totals_by_status()


class BudgetService(FinancialEntryService[Budget]):
    """Client budgets with yearly sequential codes."""

    def __init__(
        self,
        store: IBudgetStore,
        references: dict[str, IRecordStore] | None = None,
    ):
        super().__init__(store, references)
        self._budgets = store

    def validate(self, entry: Budget) -> Budget:
        entry = super().validate(entry)
        if not entry.client.strip():
            raise ValidationError(field="client", message="Client is required")
        tax_id = (entry.tax_id or "").strip()
        if tax_id and not validate_tax_id(tax_id):
            raise InvalidTaxIdError(tax_id)
        return entry.model_copy(update={"tax_id": format_tax_id(tax_id) if tax_id else None})

    async def next_code(self, year: int | None = None) -> str:
        """Next free code of the year: ORC-2024-001, ORC-2024-002, ..."""
        prefix = f"{BUDGET_CODE_PREFIX}-{year or date.today().year}-"
        last = await self._budgets.last_code(prefix)
        seq = 0
        if last:
            match = re.fullmatch(re.escape(prefix) + r"(\d+)", last)
            if match:
                seq = int(match.group(1))
        return f"{prefix}{seq + 1:03d}"

    async def create(self, entry: Budget) -> Budget:
        if not entry.code:
            entry = entry.model_copy(update={"code": await self.next_code()})
        return await super().create(entry)
