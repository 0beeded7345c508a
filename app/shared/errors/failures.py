"""
Raw failure variants consumed by the failure classifier.

A RawFailure is the framework-free description of one raised failure.
Each variant is a frozen dataclass tagged with its Origin; the
classifier dispatches on variant and payload, never on the exception
class that produced it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Mapping, Sequence, Union

from app.domain.records.errors import (
    CONNECTION_FAILURE_CODE,
    DOCUMENT_VALIDATION_CODE,
    DUPLICATE_KEY_CODE,
)


class Origin(str, Enum):
    """Where a failure came from."""

    STORAGE_DUPLICATE_KEY = "StorageDuplicateKey"
    STORAGE_DOCUMENT_VALIDATION = "StorageDocumentValidation"
    STORAGE_CONNECTION_FAILURE = "StorageConnectionFailure"
    STORAGE_CAST = "StorageCast"
    STORAGE_GENERIC = "StorageGeneric"
    SCHEMA_VALIDATION = "SchemaValidation"
    REQUEST_VALIDATION_PIPE = "RequestValidationPipe"
    PROPERTY_WHITELIST_VIOLATION = "PropertyWhitelistViolation"
    TRANSPORT_EXCEPTION = "TransportException"
    GENERIC_FAILURE = "GenericFailure"
    UNCLASSIFIED = "Unclassified"


_STORAGE_ORIGINS = {
    DUPLICATE_KEY_CODE: Origin.STORAGE_DUPLICATE_KEY,
    DOCUMENT_VALIDATION_CODE: Origin.STORAGE_DOCUMENT_VALIDATION,
    CONNECTION_FAILURE_CODE: Origin.STORAGE_CONNECTION_FAILURE,
}


@dataclass(frozen=True, kw_only=True)
class _Failure:
    """Fields every variant carries.

    Attributes:
        message: The original, unsanitized failure message.
        stack: Formatted traceback, when one was available.
    """

    ORIGIN: ClassVar[Origin]

    message: str = ""
    stack: str | None = None

    @property
    def origin(self) -> Origin:
        return self.ORIGIN


@dataclass(frozen=True, kw_only=True)
class StorageFailure(_Failure):
    """An error reported by the document store driver."""

    code: int | None = None

    @property
    def origin(self) -> Origin:
        return _STORAGE_ORIGINS.get(self.code, Origin.STORAGE_GENERIC)


@dataclass(frozen=True, kw_only=True)
class CastFailure(_Failure):
    """A single field value could not be coerced to its declared type."""

    ORIGIN = Origin.STORAGE_CAST

    field: str
    value: Any = None
    kind: str = "ObjectId"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    value: Any = None
    kind: str = "invalid"


@dataclass(frozen=True, kw_only=True)
class SchemaValidationFailure(_Failure):
    """Field-level schema validation failed on one or more fields."""

    ORIGIN = Origin.SCHEMA_VALIDATION

    errors: tuple[FieldError, ...] = ()


@dataclass(frozen=True, kw_only=True)
class TransportFailure(_Failure):
    """An HTTP exception carrying its own status and payload.

    ``payload`` is whatever the raiser attached: a string, a list of
    strings, or a mapping that may hold ``message``, ``errorCode`` and
    ``details``.
    """

    ORIGIN = Origin.TRANSPORT_EXCEPTION

    status: int
    payload: Union[str, Sequence[str], Mapping[str, Any], None] = None


@dataclass(frozen=True, kw_only=True)
class GenericFailure(_Failure):
    """Any other exception; only its message is known."""

    ORIGIN = Origin.GENERIC_FAILURE


@dataclass(frozen=True, kw_only=True)
class RequestValidationFailure(GenericFailure):
    """Inbound request data did not match the endpoint's declared input."""

    ORIGIN = Origin.REQUEST_VALIDATION_PIPE

    errors: tuple[FieldError, ...] = ()


@dataclass(frozen=True, kw_only=True)
class WhitelistFailure(GenericFailure):
    """The request payload carried properties the endpoint does not accept."""

    ORIGIN = Origin.PROPERTY_WHITELIST_VIOLATION


@dataclass(frozen=True, kw_only=True)
class UnclassifiedFailure(_Failure):
    """A raised value of no recognized shape."""

    ORIGIN = Origin.UNCLASSIFIED

    raw_type: str = ""


RawFailure = Union[
    StorageFailure,
    CastFailure,
    SchemaValidationFailure,
    TransportFailure,
    GenericFailure,
    RequestValidationFailure,
    WhitelistFailure,
    UnclassifiedFailure,
]
