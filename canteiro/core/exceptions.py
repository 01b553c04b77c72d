"""
Domain exceptions for the Canteiro application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class CanteiroError(Exception):
    """Base exception for all Canteiro errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(CanteiroError):
    """Base exception for row store operations."""

    pass


class RecordNotFoundError(StorageError):
    """Parent record (project, employee, ...) not found."""

    def __init__(self, entity: str, record_id: int):
        super().__init__(
            f"{entity.capitalize()} not found: {record_id}",
            code="RECORD_NOT_FOUND",
            details={"entity": entity, "record_id": record_id},
        )


class DocumentNotFoundError(StorageError):
    """Document metadata row not found."""

    def __init__(self, doc_id: int, kind: str | None = None):
        super().__init__(
            f"Document not found: {doc_id}",
            code="DOCUMENT_NOT_FOUND",
            details={"doc_id": doc_id, "kind": kind},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Blob Exceptions
class BlobStorageError(CanteiroError):
    """Base exception for blob store operations."""

    pass


class BlobAlreadyExistsError(BlobStorageError):
    """Upload target path is already taken."""

    def __init__(self, path: str):
        super().__init__(
            f"Blob already exists: {path}",
            code="BLOB_ALREADY_EXISTS",
            details={"path": path},
        )


class UploadFailedError(BlobStorageError):
    """Upload to the blob store failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Upload failed: {reason}",
            code="UPLOAD_FAILED",
            details={"path": path, "reason": reason},
        )


# Validation Exceptions
class ValidationError(CanteiroError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class InvalidTaxIdError(ValidationError):
    """CNPJ failed the check-digit validation."""

    def __init__(self, value: str):
        super().__init__(field="tax_id", message="Invalid CNPJ", value=value)
        self.code = "INVALID_TAX_ID"


class InvalidPlateError(ValidationError):
    """Vehicle plate does not follow the Mercosul pattern."""

    def __init__(self, value: str):
        super().__init__(
            field="plate",
            message="Plate must follow the Mercosul pattern (e.g. BRA1B23)",
            value=value,
        )
        self.code = "INVALID_PLATE"


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds size limit."""

    def __init__(self, filename: str, size: int, max_size: int):
        super().__init__(
            field="file",
            message=f"File '{filename}' is too large ({size} bytes, max {max_size})",
        )
        self.details.update(
            {
                "filename": filename,
                "size": size,
                "max_size": max_size,
            }
        )
        self.code = "FILE_TOO_LARGE"


# Authorization Exceptions
class AuthorizationError(CanteiroError):
    """Base exception for access control."""

    pass


class PermissionDeniedError(AuthorizationError):
    """User lacks the capability required by the operation."""

    def __init__(self, user_id: str | None, capability: str):
        super().__init__(
            f"Access denied to '{capability}'",
            code="PERMISSION_DENIED",
            details={"user_id": user_id, "capability": capability},
        )


class ConfigurationError(CanteiroError):
    """Configuration error."""

    pass
