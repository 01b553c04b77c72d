"""Tests for the SQLite bill and budget stores."""

from datetime import date

import pytest

from canteiro.core.entities import Bill, BillStatus, Budget, BudgetStatus
from canteiro.core.exceptions import DatabaseError


class TestBillStore:
    async def test_round_trip(self, bill_store, employee):
        created = await bill_store.create(
            Bill(
                description="Vale transporte",
                amount=220.4,
                due_date=date(2024, 7, 5),
                category="Pessoal",
                employee_id=employee.id,
            )
        )

        loaded = await bill_store.get(created.id)

        assert loaded.description == "Vale transporte"
        assert loaded.amount == 220.4
        assert loaded.due_date == date(2024, 7, 5)
        assert loaded.status == BillStatus.PENDING
        assert loaded.paid_date is None
        assert loaded.employee_id == employee.id

    async def test_list_by_due_date_undated_last(self, bill_store, sqlite_db):
        await bill_store.create(Bill(description="Sem data"))
        await bill_store.create(Bill(description="Julho", due_date=date(2024, 7, 1)))
        await bill_store.create(Bill(description="Junho", due_date=date(2024, 6, 1)))

        bills = await bill_store.list_all()

        assert [b.description for b in bills] == ["Junho", "Julho", "Sem data"]

    async def test_mark_paid(self, bill_store, sqlite_db):
        bill = await bill_store.create(Bill(description="Luz", amount=300))

        await bill_store.update(
            bill.model_copy(update={"status": BillStatus.PAID, "paid_date": date(2024, 6, 3)})
        )

        loaded = await bill_store.get(bill.id)
        assert loaded.status == BillStatus.PAID
        assert loaded.paid_date == date(2024, 6, 3)

    async def test_unknown_reference_is_wrapped(self, bill_store, sqlite_db):
        with pytest.raises(DatabaseError) as exc_info:
            await bill_store.create(Bill(description="Órfã", employee_id=9999))
        assert exc_info.value.details["operation"] == "insert into bills"

    async def test_totals_by_status(self, bill_store, sqlite_db):
        await bill_store.create(Bill(description="A", amount=100))
        await bill_store.create(Bill(description="B", amount=50.5))
        await bill_store.create(Bill(description="C", amount=900, status=BillStatus.OVERDUE))
        await bill_store.create(Bill(description="D", amount=10, status=BillStatus.PAID))

        totals = await bill_store.totals_by_status()

        assert totals.counts == {BillStatus.PENDING: 2, BillStatus.OVERDUE: 1, BillStatus.PAID: 1}
        assert totals.amounts[BillStatus.PENDING] == 150.5
        assert totals.open_amount == 1050.5

    async def test_totals_empty(self, bill_store, sqlite_db):
        totals = await bill_store.totals_by_status()

        assert totals.counts == {}
        assert totals.open_amount == 0


class TestBudgetStore:
    async def test_round_trip(self, budget_store, project):
        created = await budget_store.create(
            Budget(
                code="ORC-2024-001",
                client="Construtora Sul",
                tax_id="11.222.333/0001-81",
                amount=98000,
                status=BudgetStatus.SENT,
                project_id=project.id,
            )
        )

        loaded = await budget_store.get(created.id)

        assert loaded.code == "ORC-2024-001"
        assert loaded.status == BudgetStatus.SENT
        assert loaded.project_id == project.id

    async def test_last_code_of_prefix(self, budget_store, sqlite_db):
        for code in ("ORC-2023-015", "ORC-2024-002", "ORC-2024-010", "ORC-2024-009"):
            await budget_store.create(Budget(code=code, client="X"))

        assert await budget_store.last_code("ORC-2024-") == "ORC-2024-010"
        assert await budget_store.last_code("ORC-2025-") is None

    async def test_duplicate_code_is_rejected(self, budget_store, sqlite_db):
        await budget_store.create(Budget(code="ORC-2024-001", client="X"))

        with pytest.raises(DatabaseError):
            await budget_store.create(Budget(code="ORC-2024-001", client="Y"))

    async def test_names_for(self, budget_store, sqlite_db):
        budget = await budget_store.create(Budget(code="ORC-2024-001", client="Sul"))

        assert await budget_store.names_for([budget.id]) == {budget.id: "ORC-2024-001 - Sul"}
