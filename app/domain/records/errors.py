"""
Domain-specific errors for the records bounded context.

Storage adapters and resource services raise these and let them
propagate. They are mapped to HTTP responses at the shared error
boundary, never locally.
No framework imports allowed.
"""

from dataclasses import dataclass
from typing import Any

DUPLICATE_KEY_CODE = 11000
DOCUMENT_VALIDATION_CODE = 121
CONNECTION_FAILURE_CODE = 11001


class RecordsDomainError(Exception):
    """Base error for all records domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class StorageError(RecordsDomainError):
    """Raised when the document store rejects an operation.

    Attributes:
        code: Numeric storage-engine error code, if the driver reported one.
    """

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class DuplicateKeyError(StorageError):
    """Raised when a write conflicts with a unique index."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=DUPLICATE_KEY_CODE)


class DocumentValidationError(StorageError):
    """Raised when the store rejects a document against its collection rules."""

    def __init__(self, message: str = "Document failed validation") -> None:
        super().__init__(message, code=DOCUMENT_VALIDATION_CODE)


class StorageConnectionError(StorageError):
    """Raised when the document store cannot be reached."""

    def __init__(self, message: str = "Storage connection failed") -> None:
        super().__init__(message, code=CONNECTION_FAILURE_CODE)


class CastError(RecordsDomainError):
    """Raised when a single field value cannot be coerced to its declared type."""

    def __init__(self, path: str, value: Any, kind: str = "ObjectId") -> None:
        super().__init__(
            f'Cast to {kind} failed for value "{value}" at path "{path}"'
        )
        self.path = path
        self.value = value
        self.kind = kind


@dataclass(frozen=True)
class FieldValidationError:
    """A single per-field schema violation."""

    message: str
    value: Any = None
    kind: str = "invalid"


class SchemaValidationError(RecordsDomainError):
    """Raised when a document fails field-level schema validation.

    Attributes:
        errors: Per-field violations keyed by field path, in schema order.
    """

    def __init__(self, errors: dict[str, FieldValidationError]) -> None:
        fields = ", ".join(errors) or "document"
        super().__init__(f"Validation failed: {fields}")
        self.errors = errors
