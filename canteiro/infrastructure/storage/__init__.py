"""Storage infrastructure implementations."""

from canteiro.infrastructure.storage.blob import LocalBlobStore, get_blob_store
from canteiro.infrastructure.storage.sqlite import (
    SQLiteDocumentStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    "SQLiteDocumentStore",
    "LocalBlobStore",
    "get_blob_store",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
