"""
Diagnostic recorder.

Writes the full internal context of a handled failure to the operator
log: resolved code and status, the original unsanitized message and
stack, and the request it happened on. Nothing recorded here is ever
returned to the client.

Recording is best-effort. Log records are handed to the queue handler
installed by ``configure_logging`` and written off the request path; a
failure to record is reported on stderr and never propagates.
"""

import json
import logging
import sys
from dataclasses import dataclass
from typing import Any

from app.shared.errors.classifier import ClassificationResult
from app.shared.errors.failures import RawFailure

logger = logging.getLogger(__name__)

SERVER_ERROR_THRESHOLD = 500


@dataclass(frozen=True)
class RequestContext:
    """The parts of the inbound request worth recording.

    Attributes:
        path: Request path including the query string.
        method: HTTP method.
        body: Parsed request body, when available and allowed.
        user: Authenticated user identity, when present.
    """

    path: str
    method: str
    body: Any = None
    user: str | None = None


def _field_errors(failure: RawFailure) -> list[dict[str, Any]]:
    return [
        {
            "field": error.field,
            "message": error.message,
            "value": error.value,
            "kind": error.kind,
        }
        for error in getattr(failure, "errors", ())
    ]


def diagnostic_payload(
    failure: RawFailure, result: ClassificationResult, context: RequestContext
) -> dict[str, Any]:
    """Assemble the operator-facing record for one failure."""
    return {
        "code": result.code,
        "origin": failure.origin.value,
        "message": failure.message,
        "stack": failure.stack,
        "fieldErrors": _field_errors(failure),
        "statusCode": result.status,
        "url": context.path,
        "method": context.method,
        "body": context.body,
        "user": context.user,
    }


def record_failure(
    failure: RawFailure, result: ClassificationResult, context: RequestContext
) -> None:
    """Log one handled failure with its full context.

    Server errors are logged at ERROR, client errors at WARNING.

    Args:
        failure: The failure as raised, before classification.
        result: How the failure was classified.
        context: The request the failure occurred on.
    """
    try:
        payload = diagnostic_payload(failure, result, context)
        level = (
            logging.ERROR
            if result.status >= SERVER_ERROR_THRESHOLD
            else logging.WARNING
        )
        logger.log(
            level,
            "Exception occurred: %s %s",
            result.code,
            json.dumps(payload, default=str),
            extra={"diagnostic": payload},
        )
    except Exception as exc:  # noqa: BLE001
        sys.stderr.write(
            f"Failed to record diagnostic for {result.code}: {exc!r}\n"
        )
