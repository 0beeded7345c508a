"""
Pydantic schemas for the error envelope returned to API consumers.

These schemas define the wire contract of every error response.
Field names are snake_case in Python and camelCase on the wire.
No classification logic belongs here.
"""

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.shared.errors.taxonomy import DetailCode


class ErrorDetailBase(BaseModel):
    """Fields shared by every details variant.

    Attributes:
        suggestion: What the caller can do about the failure.
        code: Finer-grained detail code.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    suggestion: str
    code: DetailCode


class DuplicateEntryDetail(ErrorDetailBase):
    """A write collided with a unique value on one field."""

    field: str
    value: str
    code: DetailCode = DetailCode.DUPLICATE_ENTRY


class DocumentValidationDetail(ErrorDetailBase):
    code: DetailCode = DetailCode.DOCUMENT_VALIDATION_FAILED


class ConnectionFailureDetail(ErrorDetailBase):
    code: DetailCode = DetailCode.DB_CONNECTION_FAILED


class ValidationErrorItem(BaseModel):
    """One failing field of a schema validation error."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    value: Any = None
    kind: str


class SchemaValidationDetail(ErrorDetailBase):
    validation_errors: list[ValidationErrorItem]
    code: DetailCode = DetailCode.SCHEMA_VALIDATION_FAILED


class CastDetail(ErrorDetailBase):
    field: str
    value: Any = None
    code: DetailCode = DetailCode.INVALID_DATA_FORMAT


class StorageGenericDetail(ErrorDetailBase):
    storage_code: int | str | None = None
    code: DetailCode = DetailCode.UNKNOWN_DB_ERROR


class InvalidPropertiesDetail(ErrorDetailBase):
    invalid_properties: list[str]
    allowed_properties: str
    code: DetailCode = DetailCode.INVALID_PROPERTIES


class GenericDetail(ErrorDetailBase):
    code: DetailCode = DetailCode.UNEXPECTED_ERROR


class UnknownDetail(ErrorDetailBase):
    code: DetailCode = DetailCode.UNKNOWN_ERROR


ErrorDetail = Union[
    DuplicateEntryDetail,
    DocumentValidationDetail,
    ConnectionFailureDetail,
    SchemaValidationDetail,
    CastDetail,
    StorageGenericDetail,
    InvalidPropertiesDetail,
    GenericDetail,
    UnknownDetail,
]


class ErrorBody(BaseModel):
    """The ``error`` object of the envelope."""

    code: str
    message: str = Field(..., min_length=1)
    details: dict[str, Any]
    timestamp: str
    path: str
    method: str


class ErrorEnvelope(BaseModel):
    """Standard error response returned by the error boundary."""

    success: Literal[False] = False
    error: ErrorBody
