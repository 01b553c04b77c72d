"""
Parent record services.

Validate projects, employees, vehicles and accommodations before they
reach the row store, save their initial documents, keep the project
change history and clean up blobs after a cascading delete.
"""

import asyncio
from typing import Generic, Protocol, TypeVar

from canteiro.config import get_logger
from canteiro.core.entities.document import DocumentSaveRequest
from canteiro.core.entities.records import (
    Accommodation,
    Employee,
    Project,
    ProjectHistoryEntry,
    Vehicle,
)
from canteiro.core.entities.user import UserContext
from canteiro.core.exceptions import (
    InvalidPlateError,
    InvalidTaxIdError,
    RecordNotFoundError,
    ValidationError,
)
from canteiro.core.interfaces.storage import IHistoryStore, IRecordStore
from canteiro.core.services.document_lifecycle import DocumentLifecycleService
from canteiro.core.services.validation import (
    format_tax_id,
    is_valid_state,
    normalize_plate,
    validate_tax_id,
    validate_vehicle_plate,
)

logger = get_logger(__name__)


class _Record(Protocol):
    id: int | None


T = TypeVar("T", bound=_Record)


def _check_state(state: str | None) -> str:
    if not state:
        return ""
    if not is_valid_state(state):
        raise ValidationError(field="state", message="Unknown state code", value=state)
    return state.upper()


class RecordService(Generic[T]):
    """CRUD for one parent kind, with its documents."""

    def __init__(self, store: IRecordStore[T], documents: DocumentLifecycleService):
        self._store = store
        self._documents = documents

    @property
    def entity(self) -> str:
        return self._store.entity

    @property
    def documents(self) -> DocumentLifecycleService:
        return self._documents

    def validate(self, record: T) -> T:
        """Check and normalise a record before it is written."""
        return record

    async def create(
        self,
        record: T,
        documents: list[DocumentSaveRequest] | None = None,
    ) -> T:
        """
        Create a record, then save its initial documents concurrently.

        Document saves only start once the row exists, since every
        document row references it.
        """
        record = self.validate(record)
        created = await self._store.create(record)
        if documents:
            await self._documents.save_many(created.id, documents)  # type: ignore[arg-type]
        logger.info(f"{self.entity}_created", record_id=created.id)
        return created

    async def find(self, record_id: int) -> T | None:
        return await self._store.get(record_id)

    async def get(self, record_id: int) -> T:
        record = await self._store.get(record_id)
        if record is None:
            raise RecordNotFoundError(self.entity, record_id)
        return record

    async def list_all(self, limit: int = 100, offset: int = 0) -> list[T]:
        return await self._store.list_all(limit=limit, offset=offset)

    async def update(self, record: T, user: UserContext | None = None) -> T:
        if record.id is None:
            raise ValueError(f"Cannot update {self.entity} without an id")
        existing = await self.get(record.id)
        record = self.validate(record)
        updated = await self._store.update(record)
        await self._after_update(existing, updated, user)
        logger.info(f"{self.entity}_updated", record_id=record.id)
        return updated

    async def delete(self, record_id: int) -> None:
        """
        Delete a record and everything hanging off it.

        The store clears dependent rows before the record itself; blobs
        of the removed documents are then deleted best effort.
        """
        await self.get(record_id)
        doc_set = await self._documents.get_documents(record_id)

        deleted = await self._store.delete(record_id)
        if not deleted:
            raise RecordNotFoundError(self.entity, record_id)

        urls = [d.blob_url for d in doc_set.all_documents() if d.blob_url]
        if urls:
            await asyncio.gather(*(self._documents.remove_blob(u) for u in urls))
        logger.info(
            f"{self.entity}_deleted",
            record_id=record_id,
            documents_removed=len(doc_set.all_documents()),
        )

    async def _after_update(self, before: T, after: T, user: UserContext | None) -> None:
        return None


class ProjectService(RecordService[Project]):
    """Projects: CNPJ validation and field-level change history."""

    TRACKED_FIELDS = (
        "name",
        "tax_id",
        "address",
        "city",
        "state",
        "client",
        "contract_value",
        "start_date",
        "predicted_end_date",
        "status",
    )

    def __init__(
        self,
        store: IRecordStore[Project],
        documents: DocumentLifecycleService,
        history_store: IHistoryStore,
    ):
        super().__init__(store, documents)
        self._history = history_store

    def validate(self, record: Project) -> Project:
        if not record.name.strip():
            raise ValidationError(field="name", message="Name is required")
        tax_id = (record.tax_id or "").strip()
        if tax_id and not validate_tax_id(tax_id):
            raise InvalidTaxIdError(tax_id)
        return record.model_copy(
            update={
                "tax_id": format_tax_id(tax_id) if tax_id else None,
                "state": _check_state(record.state),
            }
        )

    async def history(self, project_id: int) -> list[ProjectHistoryEntry]:
        await self.get(project_id)
        return await self._history.list_for_project(project_id)

    async def _after_update(
        self, before: Project, after: Project, user: UserContext | None
    ) -> None:
        entries = []
        for name in self.TRACKED_FIELDS:
            old, new = getattr(before, name), getattr(after, name)
            if old == new:
                continue
            entries.append(
                ProjectHistoryEntry(
                    project_id=after.id,  # type: ignore[arg-type]
                    user_id=user.user_id if user else None,
                    field=name,
                    old_value=_history_value(old),
                    new_value=_history_value(new),
                )
            )
        if entries:
            await self._history.record(entries)


def _history_value(value: object) -> str | None:
    if value is None:
        return None
    if hasattr(value, "value"):
        return str(value.value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


class EmployeeService(RecordService[Employee]):
    def validate(self, record: Employee) -> Employee:
        if not record.name.strip():
            raise ValidationError(field="name", message="Name is required")
        cpf = (record.cpf or "").strip()
        return record.model_copy(
            update={"cpf": cpf or None, "state": _check_state(record.state)}
        )


class VehicleService(RecordService[Vehicle]):
    def validate(self, record: Vehicle) -> Vehicle:
        if not validate_vehicle_plate(record.plate):
            raise InvalidPlateError(record.plate)
        plate = normalize_plate(record.plate)
        return record.model_copy(update={"plate": plate})


class AccommodationService(RecordService[Accommodation]):
    def validate(self, record: Accommodation) -> Accommodation:
        if not record.name.strip():
            raise ValidationError(field="name", message="Name is required")
        return record.model_copy(update={"state": _check_state(record.state)})
