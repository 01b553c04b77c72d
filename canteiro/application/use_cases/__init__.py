"""Application use cases."""

from canteiro.application.use_cases.list_expiring_documents import (
    ExpiringDocumentsResult,
    ListExpiringDocumentsUseCase,
)

__all__ = [
    "ListExpiringDocumentsUseCase",
    "ExpiringDocumentsResult",
]
