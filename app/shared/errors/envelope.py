"""
Response builder for the error envelope.

Pure: turns a classification into the wire envelope. The only value not
taken from its inputs is the timestamp, stamped at build time.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from app.shared.errors.classifier import ClassificationResult
from app.shared.errors.schemas import ErrorBody, ErrorEnvelope


def format_timestamp(moment: datetime) -> str:
    """Render an instant as ISO-8601 UTC with millisecond precision."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def details_payload(result: ClassificationResult) -> dict[str, Any]:
    """Return the JSON-safe details mapping of a classification."""
    details = result.details
    if isinstance(details, BaseModel):
        raw = details.model_dump(by_alias=True)
    else:
        raw = dict(details)
    # Values echoed from failures (cast inputs, collaborator details) may
    # be arbitrary objects; unknown types are rendered with str().
    return to_jsonable_python(raw, serialize_unknown=True)


def build_envelope(
    result: ClassificationResult,
    path: str,
    method: str,
    now: datetime | None = None,
) -> ErrorEnvelope:
    """Assemble the client-visible error envelope.

    Args:
        result: The classification of the failure.
        path: Request path (with query string) the failure occurred on.
        method: HTTP method of the request.
        now: Render time; defaults to the current UTC instant.

    Returns:
        The envelope to serialize as the response body.
    """
    moment = now if now is not None else datetime.now(timezone.utc)
    return ErrorEnvelope(
        error=ErrorBody(
            code=result.code,
            message=result.message,
            details=details_payload(result),
            timestamp=format_timestamp(moment),
            path=path,
            method=method,
        )
    )
