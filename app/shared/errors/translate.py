"""
Translation of raised exceptions into RawFailure variants.

This is the only place that inspects exception classes. Everything
downstream works on the framework-free failure variants.
"""

import logging
import traceback
from typing import Any, Iterable

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.records.errors import CastError, SchemaValidationError, StorageError
from app.shared.errors.failures import (
    CastFailure,
    FieldError,
    GenericFailure,
    RawFailure,
    RequestValidationFailure,
    SchemaValidationFailure,
    StorageFailure,
    TransportFailure,
    UnclassifiedFailure,
    WhitelistFailure,
)

logger = logging.getLogger(__name__)

EXTRA_FORBIDDEN = "extra_forbidden"


def safe_str(value: Any) -> str:
    """Return ``str(value)``, or a placeholder when that raises."""
    try:
        return str(value)
    except Exception:  # noqa: BLE001
        return f"<unprintable {type(value).__name__}>"


def _format_stack(exc: BaseException) -> str | None:
    if exc.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _location(loc: Iterable[Any]) -> str:
    return ".".join(safe_str(part) for part in loc)


def _field_errors(errors: Iterable[dict[str, Any]]) -> tuple[FieldError, ...]:
    return tuple(
        FieldError(
            field=_location(error.get("loc", ())),
            message=safe_str(error.get("msg", "")),
            value=error.get("input"),
            kind=safe_str(error.get("type", "invalid")),
        )
        for error in errors
    )


def _request_validation_failure(
    exc: RequestValidationError, stack: str | None
) -> RawFailure:
    errors = list(exc.errors())
    forbidden = [
        error["loc"][-1]
        for error in errors
        if error.get("type") == EXTRA_FORBIDDEN and error.get("loc")
    ]
    if forbidden:
        message = "; ".join(f"property {name} should not exist" for name in forbidden)
        return WhitelistFailure(message=message, stack=stack)

    field_errors = _field_errors(errors)
    summary = "; ".join(f"{error.field}: {error.message}" for error in field_errors)
    return RequestValidationFailure(
        message=f"Validation failed: {summary}" if summary else "Validation failed",
        stack=stack,
        errors=field_errors,
    )


def _translate(exc: Any) -> RawFailure:
    if not isinstance(exc, BaseException):
        return UnclassifiedFailure(
            message=safe_str(exc) if exc is not None else "",
            raw_type=type(exc).__name__,
        )

    stack = _format_stack(exc)

    if isinstance(exc, StorageError):
        return StorageFailure(message=exc.message, stack=stack, code=exc.code)
    if isinstance(exc, CastError):
        return CastFailure(
            message=exc.message,
            stack=stack,
            field=exc.path,
            value=exc.value,
            kind=exc.kind,
        )
    if isinstance(exc, SchemaValidationError):
        return SchemaValidationFailure(
            message=exc.message,
            stack=stack,
            errors=tuple(
                FieldError(
                    field=name,
                    message=error.message,
                    value=error.value,
                    kind=error.kind,
                )
                for name, error in exc.errors.items()
            ),
        )
    if isinstance(exc, RequestValidationError):
        return _request_validation_failure(exc, stack)
    if isinstance(exc, PydanticValidationError):
        return SchemaValidationFailure(
            message=safe_str(exc),
            stack=stack,
            errors=_field_errors(exc.errors()),
        )
    if isinstance(exc, StarletteHTTPException):
        return TransportFailure(
            message=safe_str(exc),
            stack=stack,
            status=exc.status_code,
            payload=exc.detail,
        )
    if isinstance(exc, Exception):
        return GenericFailure(message=safe_str(exc), stack=stack)

    return UnclassifiedFailure(
        message=safe_str(exc), stack=stack, raw_type=type(exc).__name__
    )


def failure_from_exception(exc: Any) -> RawFailure:
    """Describe a raised value as exactly one RawFailure variant.

    Total: a value that cannot be inspected becomes an
    UnclassifiedFailure rather than an error.

    Args:
        exc: The exception (or any other value) that reached the boundary.

    Returns:
        The failure variant matching the value's shape.
    """
    try:
        return _translate(exc)
    except Exception:
        logger.exception("Failed to translate %s", type(exc).__name__)
        return UnclassifiedFailure(raw_type=type(exc).__name__)
