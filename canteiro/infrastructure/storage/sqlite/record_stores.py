"""
SQLite implementations of the parent record stores.

Deleting a parent runs its cascade plan inside one transaction: rows that
merely reference the parent get the reference cleared, rows owned by it
are deleted, and the parent goes last.
"""

from typing import ClassVar, TypeVar

import aiosqlite
from pydantic import BaseModel

from canteiro.config import get_logger
from canteiro.core.entities.finance import Bill, BillStatus, BillTotals, Budget
from canteiro.core.entities.records import (
    Accommodation,
    Employee,
    Project,
    ProjectHistoryEntry,
    Vehicle,
)
from canteiro.core.exceptions import DatabaseError, RecordNotFoundError
from canteiro.core.interfaces.storage import (
    IBillStore,
    IBudgetStore,
    IHistoryStore,
    IRecordStore,
)
from canteiro.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class SQLiteRecordStore(IRecordStore[M]):
    """Table-per-entity store driven by the entity's pydantic fields."""

    entity: ClassVar[str]
    table: ClassVar[str]
    model: ClassVar[type[BaseModel]]

    # (table, column) pairs whose reference is set to NULL on delete
    detach: ClassVar[tuple[tuple[str, str], ...]] = ()
    # (table, column) pairs whose rows are deleted with the parent
    owned: ClassVar[tuple[tuple[str, str], ...]] = ()
    order_by: ClassVar[str] = "created_at DESC, id DESC"

    @property
    def columns(self) -> list[str]:
        return [name for name in self.model.model_fields if name != "id"]

    def _values(self, record: M, columns: list[str]) -> list:
        data = record.model_dump(mode="json")
        return [data[c] for c in columns]

    def _row_to_entity(self, row: aiosqlite.Row) -> M:
        return self.model.model_validate(dict(row))  # type: ignore[return-value]

    async def create(self, record: M) -> M:
        columns = self.columns
        placeholders = ", ".join("?" for _ in columns)
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"INSERT INTO {self.table} ({', '.join(columns)}) VALUES ({placeholders})",
                    self._values(record, columns),
                )
                record_id = cursor.lastrowid
        except aiosqlite.Error as e:
            raise DatabaseError(f"insert into {self.table}", str(e)) from e

        logger.info("record_row_created", entity=self.entity, record_id=record_id)
        return record.model_copy(update={"id": record_id})

    async def get(self, record_id: int) -> M | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {self.table} WHERE id = ?", (record_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def list_all(self, limit: int = 100, offset: int = 0) -> list[M]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM {self.table}
                ORDER BY {self.order_by}
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def update(self, record: M) -> M:
        record_id = getattr(record, "id", None)
        columns = [c for c in self.columns if c != "created_at"]
        assignments = ", ".join(f"{c} = ?" for c in columns)
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"UPDATE {self.table} SET {assignments} WHERE id = ?",
                    (*self._values(record, columns), record_id),
                )
                updated = cursor.rowcount > 0
        except aiosqlite.Error as e:
            raise DatabaseError(f"update {self.table}", str(e)) from e

        if not updated:
            raise RecordNotFoundError(self.entity, record_id)  # type: ignore[arg-type]
        logger.info("record_row_updated", entity=self.entity, record_id=record_id)
        return record

    async def delete(self, record_id: int) -> bool:
        """Run the cascade plan and delete the record."""
        try:
            async with get_transaction() as conn:
                for table, column in self.detach:
                    await conn.execute(
                        f"UPDATE {table} SET {column} = NULL WHERE {column} = ?",
                        (record_id,),
                    )
                for table, column in self.owned:
                    await conn.execute(
                        f"DELETE FROM {table} WHERE {column} = ?", (record_id,)
                    )
                cursor = await conn.execute(
                    f"DELETE FROM {self.table} WHERE id = ?", (record_id,)
                )
                deleted = cursor.rowcount > 0
        except aiosqlite.Error as e:
            raise DatabaseError(f"delete from {self.table}", str(e)) from e

        if deleted:
            logger.info(
                "record_row_deleted",
                entity=self.entity,
                record_id=record_id,
                detached=[t for t, _ in self.detach],
                removed=[t for t, _ in self.owned],
            )
        return deleted

    async def names_for(self, record_ids: list[int]) -> dict[int, str]:
        ids = sorted(set(record_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {self.table} WHERE id IN ({placeholders})", tuple(ids)
            )
            rows = await cursor.fetchall()
        records = [self._row_to_entity(row) for row in rows]
        return {r.id: r.display_name for r in records}  # type: ignore[attr-defined]


class SQLiteProjectStore(SQLiteRecordStore[Project]):
    entity = "project"
    table = "projects"
    model = Project
    detach = (
        ("vehicles", "project_id"),
        ("accommodations", "project_id"),
        ("budgets", "project_id"),
        ("bills", "project_id"),
    )
    owned = (
        ("project_documents", "project_id"),
        ("project_history", "project_id"),
    )


class SQLiteEmployeeStore(SQLiteRecordStore[Employee]):
    entity = "employee"
    table = "employees"
    model = Employee
    detach = (("bills", "employee_id"),)
    owned = (("employee_documents", "employee_id"),)


class SQLiteVehicleStore(SQLiteRecordStore[Vehicle]):
    entity = "vehicle"
    table = "vehicles"
    model = Vehicle
    owned = (("vehicle_documents", "vehicle_id"),)


class SQLiteAccommodationStore(SQLiteRecordStore[Accommodation]):
    entity = "accommodation"
    table = "accommodations"
    model = Accommodation
    owned = (
        ("accommodation_documents", "accommodation_id"),
        ("bills", "accommodation_id"),
    )


class SQLiteBillStore(SQLiteRecordStore[Bill], IBillStore):
    entity = "bill"
    table = "bills"
    model = Bill
    order_by = "due_date IS NULL, due_date ASC, id ASC"

    async def totals_by_status(self) -> BillTotals:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT status, COUNT(*) AS count, COALESCE(SUM(amount), 0) AS total
                FROM bills
                GROUP BY status
                """
            )
            rows = await cursor.fetchall()

        totals = BillTotals()
        for row in rows:
            try:
                status = BillStatus(row["status"])
            except ValueError:
                logger.warning("bill_status_unknown", status=row["status"])
                continue
            totals.counts[status] = row["count"]
            totals.amounts[status] = float(row["total"])
        return totals


class SQLiteBudgetStore(SQLiteRecordStore[Budget], IBudgetStore):
    entity = "budget"
    table = "budgets"
    model = Budget

    async def last_code(self, prefix: str) -> str | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT code FROM budgets
                WHERE code LIKE ? || '%'
                ORDER BY code DESC
                LIMIT 1
                """,
                (prefix,),
            )
            row = await cursor.fetchone()
        return row["code"] if row else None


class SQLiteHistoryStore(IHistoryStore):
    """Project change history."""

    async def record(self, entries: list[ProjectHistoryEntry]) -> list[ProjectHistoryEntry]:
        saved = []
        try:
            async with get_transaction() as conn:
                for entry in entries:
                    cursor = await conn.execute(
                        """
                        INSERT INTO project_history (
                            project_id, user_id, field, old_value, new_value, created_at
                        ) VALUES (?, ?, ?, ?, ?, ?)
                        """,
                        (
                            entry.project_id,
                            entry.user_id,
                            entry.field,
                            entry.old_value,
                            entry.new_value,
                            entry.created_at.isoformat(),
                        ),
                    )
                    saved.append(entry.model_copy(update={"id": cursor.lastrowid}))
        except aiosqlite.Error as e:
            raise DatabaseError("insert into project_history", str(e)) from e

        logger.info(
            "project_history_recorded",
            project_id=entries[0].project_id if entries else None,
            count=len(saved),
        )
        return saved

    async def list_for_project(self, project_id: int) -> list[ProjectHistoryEntry]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM project_history
                WHERE project_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (project_id,),
            )
            rows = await cursor.fetchall()
            return [ProjectHistoryEntry.model_validate(dict(row)) for row in rows]
