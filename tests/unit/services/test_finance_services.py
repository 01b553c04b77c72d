"""Unit tests for the bill and budget services."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from canteiro.core.entities import (
    Bill,
    BillStatus,
    BillTotals,
    Budget,
    Employee,
)
from canteiro.core.exceptions import (
    InvalidTaxIdError,
    RecordNotFoundError,
    ValidationError,
)
from canteiro.core.services.finance import BillService, BudgetService


def _entry_store(entity: str) -> AsyncMock:
    store = AsyncMock()
    store.entity = entity

    async def create(entry):
        return entry.model_copy(update={"id": 1})

    async def update(entry):
        return entry

    store.create.side_effect = create
    store.update.side_effect = update
    store.delete.return_value = True
    store.last_code.return_value = None
    return store


def _parent_store(entity: str, record=None) -> AsyncMock:
    store = AsyncMock()
    store.entity = entity
    store.get.return_value = record
    return store


@pytest.fixture
def bill_store() -> AsyncMock:
    return _entry_store("bill")


@pytest.fixture
def employee_store() -> AsyncMock:
    return _parent_store("employee", Employee(id=7, name="Maria Souza"))


@pytest.fixture
def accommodation_store() -> AsyncMock:
    return _parent_store("accommodation", None)


@pytest.fixture
def bills(bill_store, employee_store, accommodation_store) -> BillService:
    return BillService(
        bill_store,
        references={"employee_id": employee_store, "accommodation_id": accommodation_store},
    )


@pytest.fixture
def budget_store() -> AsyncMock:
    return _entry_store("budget")


@pytest.fixture
def budgets(budget_store) -> BudgetService:
    return BudgetService(budget_store)


class TestBillService:
    async def test_create(self, bills, bill_store, employee_store):
        created = await bills.create(Bill(description="Vale transporte", amount=220, employee_id=7))

        assert created.id == 1
        employee_store.get.assert_awaited_once_with(7)
        bill_store.create.assert_awaited_once()

    async def test_unknown_reference_is_rejected(self, bills, bill_store, accommodation_store):
        with pytest.raises(ValidationError) as exc_info:
            await bills.create(Bill(description="Aluguel", accommodation_id=99))

        assert exc_info.value.details["field"] == "accommodation_id"
        assert exc_info.value.details["message"] == "Unknown accommodation"
        bill_store.create.assert_not_awaited()

    async def test_unset_references_are_not_looked_up(self, bills, employee_store, accommodation_store):
        await bills.create(Bill(description="Material"))

        employee_store.get.assert_not_awaited()
        accommodation_store.get.assert_not_awaited()

    async def test_blank_description(self, bills):
        with pytest.raises(ValidationError) as exc_info:
            await bills.create(Bill(description="   "))
        assert exc_info.value.details["field"] == "description"

    async def test_negative_amount(self, bills):
        with pytest.raises(ValidationError) as exc_info:
            await bills.create(Bill(description="Estorno", amount=-5))
        assert exc_info.value.details["field"] == "amount"

    async def test_paid_without_date_is_paid_today(self, bills):
        created = await bills.create(Bill(description="Luz", status=BillStatus.PAID))

        assert created.paid_date == date.today()

    async def test_back_to_pending_clears_payment(self, bills, bill_store):
        bill_store.get.return_value = Bill(
            id=3, description="Luz", status=BillStatus.PAID, paid_date=date(2024, 5, 2)
        )

        updated = await bills.update(
            Bill(id=3, description="Luz", status=BillStatus.PENDING, paid_date=date(2024, 5, 2))
        )

        assert updated.paid_date is None

    async def test_update_missing(self, bills, bill_store):
        bill_store.get.return_value = None

        with pytest.raises(RecordNotFoundError):
            await bills.update(Bill(id=404, description="X"))
        bill_store.update.assert_not_awaited()

    async def test_delete(self, bills, bill_store):
        bill_store.get.return_value = Bill(id=3, description="Luz")

        await bills.delete(3)

        bill_store.delete.assert_awaited_once_with(3)

    async def test_totals(self, bills, bill_store):
        bill_store.totals_by_status.return_value = BillTotals(
            amounts={BillStatus.PENDING: 100.0, BillStatus.OVERDUE: 50.0, BillStatus.PAID: 999.0}
        )

        totals = await bills.totals()

        assert totals.open_amount == 150.0


class TestBillOverdue:
    def test_pending_past_due(self):
        bill = Bill(description="X", due_date=date(2024, 5, 31))
        assert bill.is_overdue(today=date(2024, 6, 1)) is True

    def test_due_today_is_not_overdue(self):
        bill = Bill(description="X", due_date=date(2024, 6, 1))
        assert bill.is_overdue(today=date(2024, 6, 1)) is False

    def test_paid_is_never_overdue(self):
        bill = Bill(description="X", due_date=date(2024, 5, 1), status=BillStatus.PAID)
        assert bill.is_overdue(today=date(2024, 6, 1)) is False

    def test_without_due_date(self):
        assert Bill(description="X").is_overdue(today=date(2024, 6, 1)) is False


class TestBudgetService:
    async def test_first_code_of_year(self, budgets, budget_store):
        assert await budgets.next_code(year=2024) == "ORC-2024-001"
        budget_store.last_code.assert_awaited_once_with("ORC-2024-")

    async def test_code_follows_last(self, budgets, budget_store):
        budget_store.last_code.return_value = "ORC-2024-041"

        assert await budgets.next_code(year=2024) == "ORC-2024-042"

    async def test_unparseable_last_code_restarts(self, budgets, budget_store):
        budget_store.last_code.return_value = "ORC-2024-abc"

        assert await budgets.next_code(year=2024) == "ORC-2024-001"

    async def test_create_assigns_code(self, budgets, budget_store):
        budget_store.last_code.return_value = f"ORC-{date.today().year}-007"

        created = await budgets.create(Budget(client="Construtora Sul"))

        assert created.code == f"ORC-{date.today().year}-008"

    async def test_create_keeps_given_code(self, budgets, budget_store):
        created = await budgets.create(Budget(code="ESP-1", client="Construtora Sul"))

        assert created.code == "ESP-1"
        budget_store.last_code.assert_not_awaited()

    async def test_tax_id_is_formatted(self, budgets):
        created = await budgets.create(Budget(client="X", tax_id="11222333000181"))

        assert created.tax_id == "11.222.333/0001-81"

    async def test_invalid_tax_id(self, budgets, budget_store):
        with pytest.raises(InvalidTaxIdError):
            await budgets.create(Budget(client="X", tax_id="11.222.333/0001-82"))
        budget_store.create.assert_not_awaited()

    async def test_client_required(self, budgets):
        with pytest.raises(ValidationError) as exc_info:
            await budgets.create(Budget(client=""))
        assert exc_info.value.details["field"] == "client"

    async def test_get_missing(self, budgets, budget_store):
        budget_store.get.return_value = None

        with pytest.raises(RecordNotFoundError) as exc_info:
            await budgets.get(5)
        assert exc_info.value.code == "RECORD_NOT_FOUND"


class TestBudgetDisplayName:
    def test_code_and_client(self):
        assert Budget(code="ORC-2024-001", client="Sul").display_name == "ORC-2024-001 - Sul"

    def test_fallback_to_id(self):
        assert Budget(id=9).display_name == "Orçamento 9"
