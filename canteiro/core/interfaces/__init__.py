"""Core interfaces (abstract base classes)."""

from canteiro.core.interfaces.storage import (
    IBillStore,
    IBlobStore,
    IBudgetStore,
    IDocumentStore,
    IHistoryStore,
    IRecordStore,
)

__all__ = [
    "IBillStore",
    "IBlobStore",
    "IBudgetStore",
    "IDocumentStore",
    "IHistoryStore",
    "IRecordStore",
]
