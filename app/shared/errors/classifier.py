"""
Failure classifier.

Maps a RawFailure to exactly one taxonomy entry by walking an ordered
tuple of (predicate, handler) rules. The rules overlap by construction;
the first match wins and no later rule is consulted. Classification is
deterministic: it reads nothing but the failure itself.
"""

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Mapping, NamedTuple, Union

from app.domain.records.errors import (
    CONNECTION_FAILURE_CODE,
    DOCUMENT_VALIDATION_CODE,
    DUPLICATE_KEY_CODE,
)
from app.shared.errors.extraction import (
    extract_duplicate_key,
    extract_invalid_properties,
    invalid_properties_detail,
    mentions_invalid_property,
)
from app.shared.errors.failures import (
    CastFailure,
    GenericFailure,
    RawFailure,
    SchemaValidationFailure,
    StorageFailure,
    TransportFailure,
)
from app.shared.errors.fields import display_name
from app.shared.errors.schemas import (
    CastDetail,
    ConnectionFailureDetail,
    DocumentValidationDetail,
    DuplicateEntryDetail,
    ErrorDetail,
    GenericDetail,
    SchemaValidationDetail,
    StorageGenericDetail,
    UnknownDetail,
    ValidationErrorItem,
)
from app.shared.errors.taxonomy import DetailCode, ErrorCode, status_for

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR_MESSAGE = "Internal server error"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
INVALID_PROPERTIES_MESSAGE = "Invalid properties in request body"
DEFAULT_HTTP_SUGGESTION = "Please check your request and try again"


@dataclass(frozen=True)
class ClassificationResult:
    """The taxonomy entry chosen for one failure.

    Attributes:
        code: Taxonomy code, or a collaborator-supplied code on pass-through.
        status: HTTP status to respond with.
        message: Client-safe, non-empty message.
        details: A details variant, or a collaborator's own details mapping.
    """

    code: str
    status: int
    message: str
    details: Union[ErrorDetail, Mapping[str, Any]]


class Rule(NamedTuple):
    name: str
    matches: Callable[[RawFailure], bool]
    handle: Callable[[RawFailure], ClassificationResult]


def _result(
    code: ErrorCode, message: str, details: ErrorDetail
) -> ClassificationResult:
    return ClassificationResult(
        code=code.value, status=status_for(code), message=message, details=details
    )


# ------------------------------------------------------------------
# Predicates
# ------------------------------------------------------------------


def _storage_code_is(code: int) -> Callable[[RawFailure], bool]:
    def predicate(failure: RawFailure) -> bool:
        return isinstance(failure, StorageFailure) and failure.code == code

    return predicate


def _is_generic(failure: RawFailure) -> bool:
    return isinstance(failure, GenericFailure)


def _is_validation_pipe(failure: RawFailure) -> bool:
    return _is_generic(failure) and "Validation failed" in failure.message


def _is_whitelist_message(failure: RawFailure) -> bool:
    return (
        _is_generic(failure)
        and "property" in failure.message
        and "should not exist" in failure.message
    )


# ------------------------------------------------------------------
# Handlers
# ------------------------------------------------------------------


def _duplicate_key(failure: StorageFailure) -> ClassificationResult:
    match = extract_duplicate_key(failure.message)
    if match is None:
        return _result(
            ErrorCode.DUPLICATE_KEY_ERROR,
            "Duplicate entry found",
            GenericDetail(
                suggestion="Please check your input and try again",
                code=DetailCode.DUPLICATE_ENTRY,
            ),
        )
    label = display_name(match.field)
    return _result(
        ErrorCode.DUPLICATE_KEY_ERROR,
        f"{label} already exists",
        DuplicateEntryDetail(
            field=match.field,
            value=match.value,
            suggestion=f"Please use a different {label.lower()}",
        ),
    )


def _document_validation(_failure: StorageFailure) -> ClassificationResult:
    return _result(
        ErrorCode.VALIDATION_ERROR,
        "Document validation failed",
        DocumentValidationDetail(
            suggestion="Please check your input data and try again"
        ),
    )


def _connection_failure(_failure: StorageFailure) -> ClassificationResult:
    return _result(
        ErrorCode.CONNECTION_ERROR,
        "Database connection failed",
        ConnectionFailureDetail(
            suggestion="Please try again later or contact support"
        ),
    )


def _schema_validation(failure: SchemaValidationFailure) -> ClassificationResult:
    items = [
        ValidationErrorItem(
            field=error.field,
            message=error.message,
            value=error.value,
            kind=error.kind,
        )
        for error in failure.errors
    ]
    return _result(
        ErrorCode.VALIDATION_ERROR,
        "Validation failed",
        SchemaValidationDetail(
            validation_errors=items,
            suggestion="Please check the highlighted fields and try again",
        ),
    )


def _cast(failure: CastFailure) -> ClassificationResult:
    return _result(
        ErrorCode.CAST_ERROR,
        "Invalid data format",
        CastDetail(
            field=failure.field,
            value=failure.value,
            suggestion="Please provide a valid format for this field",
        ),
    )


def _storage_generic(failure: StorageFailure) -> ClassificationResult:
    return _result(
        ErrorCode.MONGODB_ERROR,
        "Database operation failed",
        StorageGenericDetail(
            storage_code=failure.code,
            suggestion="Please try again or contact support if the problem persists",
        ),
    )


def _invalid_properties(properties: list[str]) -> ClassificationResult:
    return _result(
        ErrorCode.INVALID_PROPERTIES,
        INVALID_PROPERTIES_MESSAGE,
        invalid_properties_detail(properties),
    )


def _message_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "; ".join(str(item) for item in value)
    return ""


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Request failed"


def _transport(failure: TransportFailure) -> ClassificationResult:
    payload = failure.payload
    messages = payload.get("message") if isinstance(payload, Mapping) else payload

    # Whitelist violations win over anything the raiser attached.
    if mentions_invalid_property(messages):
        return _invalid_properties(extract_invalid_properties(messages))

    error_code = ErrorCode.HTTP_EXCEPTION.value
    details: Any = None
    if isinstance(payload, Mapping):
        error_code = str(payload.get("errorCode") or error_code)
        details = payload.get("details")

    if isinstance(details, Mapping):
        details = {"suggestion": DEFAULT_HTTP_SUGGESTION, **details}
    else:
        details = GenericDetail(
            suggestion=DEFAULT_HTTP_SUGGESTION, code=DetailCode.HTTP_ERROR
        )

    status = int(failure.status)
    message = _message_text(messages) or _reason_phrase(status)
    return ClassificationResult(
        code=error_code, status=status, message=message, details=details
    )


def _validation_pipe(_failure: GenericFailure) -> ClassificationResult:
    return _result(
        ErrorCode.VALIDATION_PIPE_ERROR,
        "Request validation failed",
        GenericDetail(
            suggestion="Please check your request data and try again",
            code=DetailCode.REQUEST_VALIDATION_FAILED,
        ),
    )


def _whitelist_message(failure: GenericFailure) -> ClassificationResult:
    return _invalid_properties(extract_invalid_properties(failure.message))


def _generic(failure: GenericFailure) -> ClassificationResult:
    return _result(
        ErrorCode.GENERIC_ERROR,
        failure.message or UNEXPECTED_ERROR_MESSAGE,
        GenericDetail(suggestion="Please try again or contact support"),
    )


def _unknown(_failure: Any = None) -> ClassificationResult:
    return _result(
        ErrorCode.UNKNOWN_ERROR,
        INTERNAL_SERVER_ERROR_MESSAGE,
        UnknownDetail(suggestion="Please try again or contact support"),
    )


RULES: tuple[Rule, ...] = (
    Rule("duplicate_key", _storage_code_is(DUPLICATE_KEY_CODE), _duplicate_key),
    Rule(
        "document_validation",
        _storage_code_is(DOCUMENT_VALIDATION_CODE),
        _document_validation,
    ),
    Rule(
        "connection_failure",
        _storage_code_is(CONNECTION_FAILURE_CODE),
        _connection_failure,
    ),
    Rule(
        "schema_validation",
        lambda failure: isinstance(failure, SchemaValidationFailure),
        _schema_validation,
    ),
    Rule("cast", lambda failure: isinstance(failure, CastFailure), _cast),
    Rule(
        "storage_generic",
        lambda failure: isinstance(failure, StorageFailure),
        _storage_generic,
    ),
    Rule(
        "transport",
        lambda failure: isinstance(failure, TransportFailure),
        _transport,
    ),
    Rule("validation_pipe", _is_validation_pipe, _validation_pipe),
    Rule("whitelist_message", _is_whitelist_message, _whitelist_message),
    Rule("generic", _is_generic, _generic),
    Rule("unknown", lambda _failure: True, _unknown),
)


def match_rule(failure: RawFailure) -> Rule:
    """Return the first rule whose predicate accepts the failure."""
    return next(rule for rule in RULES if rule.matches(failure))


def classify(failure: RawFailure) -> ClassificationResult:
    """Classify a failure into one taxonomy entry.

    Total: every input yields a result. If a rule raises while matching
    or handling, the failure is reported as UNKNOWN_ERROR instead.

    Args:
        failure: The failure to classify.

    Returns:
        The classification of the first matching rule.
    """
    try:
        rule = match_rule(failure)
        return rule.handle(failure)
    except Exception:
        logger.exception(
            "Failure classification raised for %s", type(failure).__name__
        )
        return _unknown(failure)
