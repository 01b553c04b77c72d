"""Typed document entities attached to projects, employees, vehicles and accommodations."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from canteiro.core.entities.alert import AlertStatus


class Unset(Enum):
    """Marker for "leave this field unchanged" (distinct from None, which clears it)."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = Unset.UNSET


@dataclass(frozen=True)
class DocumentKind:
    """
    Storage and typing rules for the documents of one parent kind.

    Every parent kind keeps its documents in its own table, under its own
    foreign-key column, with a closed set of document types. Types outside
    the set are stored under ``other_type`` instead of being rejected.
    """

    name: str
    label: str
    table: str
    parent_table: str
    parent_column: str
    allowed_types: frozenset[str]
    other_type: str = "outros"
    contract_type: str | None = None
    path_prefix: str = ""

    def coerce_type(self, raw: str | None) -> str:
        """Lower-case the type and fall back to the catch-all category."""
        safe_type = (raw or "").strip().lower()
        if safe_type not in self.allowed_types:
            return self.other_type
        return safe_type

    def storage_path(self, parent_id: int, doc_type: str, name: str) -> str:
        """Blob path for an upload: {prefix/}{parent}/{type}/{name}."""
        path = f"{parent_id}/{doc_type}/{name}"
        if self.path_prefix:
            return f"{self.path_prefix.strip('/')}/{path}"
        return path


PROJECT_DOCUMENTS = DocumentKind(
    name="project",
    label="Obra",
    table="project_documents",
    parent_table="projects",
    parent_column="project_id",
    allowed_types=frozenset(
        {
            "contrato",
            "pgr",
            "pcmso",
            "art",
            "seguro",
            "cno",
            "cnpj",
            "alvara",
            "licenca_ambiental",
            "outros",
        }
    ),
    contract_type="contrato",
)

EMPLOYEE_DOCUMENTS = DocumentKind(
    name="employee",
    label="Colaborador",
    table="employee_documents",
    parent_table="employees",
    parent_column="employee_id",
    allowed_types=frozenset(
        {
            "aso",
            "epi",
            "nr6",
            "nr10",
            "nr12",
            "nr17",
            "nr18",
            "nr35",
            "os",
            "contrato",
            "rg",
            "cpf",
            "folha_registro",
            "outros",
        }
    ),
)

VEHICLE_DOCUMENTS = DocumentKind(
    name="vehicle",
    label="Veículo",
    table="vehicle_documents",
    parent_table="vehicles",
    parent_column="vehicle_id",
    allowed_types=frozenset({"crlv", "seguro", "manutencao", "outros"}),
)

ACCOMMODATION_DOCUMENTS = DocumentKind(
    name="accommodation",
    label="Alojamento",
    table="accommodation_documents",
    parent_table="accommodations",
    parent_column="accommodation_id",
    allowed_types=frozenset(
        {
            "contrato_locacao",
            "laudo_vistoria",
            "laudo_vistoria_inicio",
            "laudo_vistoria_fim",
            "conta_luz",
            "conta_agua",
            "outros",
        }
    ),
)

DOCUMENT_KINDS: dict[str, DocumentKind] = {
    kind.name: kind
    for kind in (
        PROJECT_DOCUMENTS,
        EMPLOYEE_DOCUMENTS,
        VEHICLE_DOCUMENTS,
        ACCOMMODATION_DOCUMENTS,
    )
}


def get_document_kind(name: str) -> DocumentKind:
    """Look up a registered document kind by name."""
    try:
        return DOCUMENT_KINDS[name]
    except KeyError:
        raise KeyError(f"Unknown document kind: {name}") from None


@dataclass
class FileUpload:
    """File payload submitted with a document."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def extension(self) -> str:
        return self.filename.rsplit(".", 1)[-1]

    @property
    def size(self) -> int:
        return len(self.content)


class TypedDocument(BaseModel):
    """
    One file (or placeholder) attached to a parent record.

    A row may exist without a blob: contracts and fixed-slot documents can
    carry metadata (expiry, value, description) before a file is supplied.
    """

    id: int | None = None
    parent_id: int
    kind: str
    doc_type: str
    description: str | None = None
    file_name: str | None = None
    blob_url: str | None = None
    uploaded_at: datetime = Field(default_factory=datetime.utcnow)
    expires_at: date | None = None
    value: float | None = None

    @property
    def has_file(self) -> bool:
        return self.blob_url is not None

    @property
    def is_contract(self) -> bool:
        kind = DOCUMENT_KINDS.get(self.kind)
        return kind is not None and kind.contract_type == self.doc_type

    @property
    def display_name(self) -> str:
        if self.file_name:
            return self.file_name
        return "Contrato (Sem Anexo)" if self.is_contract else "Sem Anexo"

    def alert_status(self, today: date | None = None) -> AlertStatus:
        """Expiry badge; documents without an expiry date never alert."""
        from canteiro.core.services.validation import get_alert_status

        return get_alert_status(self.expires_at, today=today)


class DocumentSet(BaseModel):
    """
    A parent's documents grouped into slots.

    Fixed types occupy one slot keyed by type. Repeated types (the
    catch-all category accumulates) get a ``{type}_{id}`` key. Contracts
    are kept apart as an ordered list.
    """

    slots: dict[str, TypedDocument] = Field(default_factory=dict)
    contracts: list[TypedDocument] = Field(default_factory=list)

    @classmethod
    def from_documents(
        cls, kind: DocumentKind, documents: list[TypedDocument]
    ) -> "DocumentSet":
        result = cls()
        for doc in documents:
            if kind.contract_type is not None and doc.doc_type == kind.contract_type:
                result.contracts.append(doc)
                continue
            key = doc.doc_type
            if key in result.slots:
                key = f"{doc.doc_type}_{doc.id}"
            result.slots[key] = doc
        return result

    def all_documents(self) -> list[TypedDocument]:
        return list(self.slots.values()) + list(self.contracts)


class ExpiringDocument(BaseModel):
    """Dashboard alert row for a document with an expiry date."""

    document: TypedDocument
    category: str
    parent_name: str
    status: AlertStatus
    days_left: int | None = None


@dataclass
class DocumentSaveRequest:
    """One independent document save within a form submission."""

    doc_type: str
    file: FileUpload | None = None
    expires_at: date | None | Unset = UNSET
    existing_doc_id: int | None = None
    description: str | None | Unset = UNSET
    value: float | None | Unset = UNSET
