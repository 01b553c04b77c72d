"""Blob storage implementations."""

from canteiro.config import get_settings
from canteiro.infrastructure.storage.blob.local import LocalBlobStore

_blob_store: LocalBlobStore | None = None


def get_blob_store() -> LocalBlobStore:
    """Get singleton blob store configured from settings."""
    global _blob_store
    if _blob_store is None:
        settings = get_settings().blob
        _blob_store = LocalBlobStore(
            root_dir=settings.root_dir,
            bucket=settings.bucket,
            public_base_url=settings.public_base_url,
        )
    return _blob_store


def reset_blob_store() -> None:
    """Reset blob store singleton (for testing)."""
    global _blob_store
    _blob_store = None


__all__ = ["LocalBlobStore", "get_blob_store", "reset_blob_store"]
