"""
Pre-classified exceptions for collaborating services.

Services normally let failures propagate to the error boundary. When a
service wants a more specific code than the boundary would infer, it
raises ApiError, whose ``errorCode`` and ``details`` the boundary passes
through unchanged.
"""

from typing import Any, NoReturn

from fastapi import HTTPException

from app.domain.records.errors import (
    DUPLICATE_KEY_CODE,
    CastError,
    SchemaValidationError,
    StorageError,
)
from app.shared.errors.classifier import classify
from app.shared.errors.envelope import details_payload
from app.shared.errors.translate import failure_from_exception


class ApiError(HTTPException):
    """An HTTP exception that already knows its error code and details.

    Attributes:
        error_code: Code to report in ``error.code``.
        details: Mapping to report in ``error.details``.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.error_code = error_code
        self.details = details
        super().__init__(
            status_code=status_code,
            detail={"message": message, "errorCode": error_code, "details": details},
        )


def is_duplicate_key_error(exc: BaseException) -> bool:
    """True if the exception is a unique-index conflict."""
    return isinstance(exc, StorageError) and exc.code == DUPLICATE_KEY_CODE


def is_validation_error(exc: BaseException) -> bool:
    """True if the exception is a field-level schema validation failure."""
    return isinstance(exc, SchemaValidationError)


def is_cast_error(exc: BaseException) -> bool:
    """True if the exception is a single-field cast failure."""
    return isinstance(exc, CastError)


def raise_storage_error(exc: BaseException) -> NoReturn:
    """Re-raise a storage-layer exception as a pre-classified ApiError.

    Storage, cast and schema validation errors are classified here and
    raised as ApiError carrying the resolved status, code and details.
    Any other exception is re-raised unchanged.

    Args:
        exc: The exception caught from a storage operation.

    Raises:
        ApiError: For storage-layer exceptions.
    """
    if not isinstance(exc, (StorageError, CastError, SchemaValidationError)):
        raise exc
    result = classify(failure_from_exception(exc))
    raise ApiError(
        status_code=result.status,
        message=result.message,
        error_code=result.code,
        details=details_payload(result),
    ) from exc
