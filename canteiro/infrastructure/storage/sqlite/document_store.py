"""
SQLite implementation of typed document storage.

One store instance per document kind; table and parent column names come
from the kind's registration, never from request input.
"""

from datetime import date, datetime
from typing import Any

import aiosqlite

from canteiro.config import get_logger
from canteiro.core.entities.document import DocumentKind, TypedDocument
from canteiro.core.exceptions import DatabaseError
from canteiro.core.interfaces.storage import IDocumentStore
from canteiro.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"doc_type", "description", "file_name", "blob_url", "uploaded_at", "expires_at", "value"}
)


def _to_db(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class SQLiteDocumentStore(IDocumentStore):
    """SQLite implementation of document metadata storage."""

    def __init__(self, kind: DocumentKind):
        self.kind = kind
        self._table = kind.table
        self._parent_column = kind.parent_column

    async def insert(self, doc: TypedDocument) -> TypedDocument:
        """Insert a new document row."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"""
                    INSERT INTO {self._table} (
                        {self._parent_column}, doc_type, description, file_name,
                        blob_url, uploaded_at, expires_at, value
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        doc.parent_id,
                        doc.doc_type,
                        doc.description,
                        doc.file_name,
                        doc.blob_url,
                        doc.uploaded_at.isoformat(),
                        _to_db(doc.expires_at),
                        doc.value,
                    ),
                )
                doc_id = cursor.lastrowid
        except aiosqlite.Error as e:
            logger.error("document_insert_failed", kind=self.kind.name, error=str(e))
            raise DatabaseError(f"insert into {self._table}", str(e)) from e

        logger.info(
            "document_row_created",
            kind=self.kind.name,
            doc_id=doc_id,
            parent_id=doc.parent_id,
            doc_type=doc.doc_type,
        )
        return doc.model_copy(update={"id": doc_id, "kind": self.kind.name})

    async def get(self, doc_id: int) -> TypedDocument | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {self._table} WHERE id = ?", (doc_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def update_fields(self, doc_id: int, fields: dict[str, Any]) -> bool:
        """Partial update of the given columns only."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update document fields: {sorted(unknown)}")
        if not fields:
            return await self.get(doc_id) is not None

        columns = sorted(fields)
        assignments = ", ".join(f"{c} = ?" for c in columns)
        params = [_to_db(fields[c]) for c in columns]

        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"UPDATE {self._table} SET {assignments} WHERE id = ?",
                    (*params, doc_id),
                )
                updated = cursor.rowcount > 0
        except aiosqlite.Error as e:
            raise DatabaseError(f"update {self._table}", str(e)) from e

        if updated:
            logger.debug("document_row_updated", kind=self.kind.name, doc_id=doc_id)
        return updated

    async def delete(self, doc_id: int) -> bool:
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"DELETE FROM {self._table} WHERE id = ?", (doc_id,)
                )
                deleted = cursor.rowcount > 0
        except aiosqlite.Error as e:
            logger.error(
                "document_delete_failed", kind=self.kind.name, doc_id=doc_id, error=str(e)
            )
            raise DatabaseError(f"delete from {self._table}", str(e)) from e

        if deleted:
            logger.info("document_row_deleted", kind=self.kind.name, doc_id=doc_id)
        return deleted

    async def list_by_parent(self, parent_id: int) -> list[TypedDocument]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM {self._table}
                WHERE {self._parent_column} = ?
                ORDER BY uploaded_at ASC, id ASC
                """,
                (parent_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def list_by_parents(self, parent_ids: list[int]) -> list[TypedDocument]:
        if not parent_ids:
            return []
        placeholders = ", ".join("?" for _ in parent_ids)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM {self._table}
                WHERE {self._parent_column} IN ({placeholders})
                ORDER BY {self._parent_column}, uploaded_at ASC, id ASC
                """,
                tuple(parent_ids),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def list_with_expiry(self, until: date | None = None) -> list[TypedDocument]:
        query = f"SELECT * FROM {self._table} WHERE expires_at IS NOT NULL"
        params: tuple = ()
        if until is not None:
            query += " AND expires_at <= ?"
            params = (until.isoformat(),)
        query += " ORDER BY expires_at ASC, id ASC"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    def _row_to_entity(self, row: aiosqlite.Row) -> TypedDocument:
        """Convert a database row to a TypedDocument entity."""
        expires_at = None
        if row["expires_at"]:
            try:
                expires_at = date.fromisoformat(row["expires_at"][:10])
            except (ValueError, TypeError):
                pass

        uploaded_at = datetime.utcnow()
        if row["uploaded_at"]:
            try:
                uploaded_at = datetime.fromisoformat(row["uploaded_at"])
            except (ValueError, TypeError):
                pass

        return TypedDocument(
            id=row["id"],
            parent_id=row[self._parent_column],
            kind=self.kind.name,
            doc_type=row["doc_type"],
            description=row["description"],
            file_name=row["file_name"],
            blob_url=row["blob_url"],
            uploaded_at=uploaded_at,
            expires_at=expires_at,
            value=row["value"],
        )
