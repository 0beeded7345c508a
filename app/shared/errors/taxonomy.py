"""
Error taxonomy for the API error contract.

Taxonomy codes are a closed, versioned set. Consumers switch on them for
programmatic handling, so existing values must never change meaning.
"""

from enum import Enum
from http import HTTPStatus


class ErrorCode(str, Enum):
    """Top-level code returned in ``error.code``."""

    DUPLICATE_KEY_ERROR = "DUPLICATE_KEY_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    CAST_ERROR = "CAST_ERROR"
    MONGODB_ERROR = "MONGODB_ERROR"
    HTTP_EXCEPTION = "HTTP_EXCEPTION"
    INVALID_PROPERTIES = "INVALID_PROPERTIES"
    VALIDATION_PIPE_ERROR = "VALIDATION_PIPE_ERROR"
    GENERIC_ERROR = "GENERIC_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class DetailCode(str, Enum):
    """Finer-grained code returned in ``error.details.code``."""

    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    DOCUMENT_VALIDATION_FAILED = "DOCUMENT_VALIDATION_FAILED"
    DB_CONNECTION_FAILED = "DB_CONNECTION_FAILED"
    SCHEMA_VALIDATION_FAILED = "SCHEMA_VALIDATION_FAILED"
    INVALID_DATA_FORMAT = "INVALID_DATA_FORMAT"
    UNKNOWN_DB_ERROR = "UNKNOWN_DB_ERROR"
    INVALID_PROPERTIES = "INVALID_PROPERTIES"
    REQUEST_VALIDATION_FAILED = "REQUEST_VALIDATION_FAILED"
    HTTP_ERROR = "HTTP_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


# HTTP_EXCEPTION is absent: its status always comes from the source exception.
STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.DUPLICATE_KEY_ERROR: HTTPStatus.CONFLICT,
    ErrorCode.VALIDATION_ERROR: HTTPStatus.BAD_REQUEST,
    ErrorCode.CONNECTION_ERROR: HTTPStatus.SERVICE_UNAVAILABLE,
    ErrorCode.CAST_ERROR: HTTPStatus.BAD_REQUEST,
    ErrorCode.MONGODB_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorCode.INVALID_PROPERTIES: HTTPStatus.BAD_REQUEST,
    ErrorCode.VALIDATION_PIPE_ERROR: HTTPStatus.BAD_REQUEST,
    ErrorCode.GENERIC_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorCode.UNKNOWN_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def status_for(code: ErrorCode) -> int:
    """Return the canonical HTTP status for a taxonomy code."""
    return int(STATUS_BY_CODE[code])


ALLOWED_PROPERTIES_HINT = (
    "Only username, email, password, phoneNumber, department, "
    "employmentType, startDate, qualifications, and experience are allowed"
)
