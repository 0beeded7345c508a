"""
Centralized error handlers for FastAPI.

Every unhandled failure in the backend ends here. Each is translated,
classified, rendered as the standard error envelope and recorded for
operators. No stack traces or internal details are exposed to clients.

Typed failures are dispatched by Starlette's exception middleware.
Anything else is caught by ``FailureBoundaryMiddleware`` inside the
application stack, so no exception reaches the ASGI server.
"""

import json
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.config import settings
from app.domain.records.errors import RecordsDomainError
from app.shared.errors.classifier import classify
from app.shared.errors.envelope import build_envelope
from app.shared.errors.recorder import RequestContext, record_failure
from app.shared.errors.translate import failure_from_exception, safe_str

HANDLED_EXCEPTIONS: tuple[type[Exception], ...] = (
    RecordsDomainError,
    PydanticValidationError,
    RequestValidationError,
    StarletteHTTPException,
)


def _request_path(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


def _user_identity(request: Request) -> str | None:
    # Only present when an authentication middleware populated the scope.
    user = request.scope.get("user")
    if user is None:
        return None
    try:
        if not getattr(user, "is_authenticated", True):
            return None
        identity = getattr(user, "identity", None) or getattr(
            user, "display_name", None
        )
    except Exception:  # noqa: BLE001
        return None
    return safe_str(identity) if identity else safe_str(user)


async def _parsed_body(request: Request) -> Any:
    if "json" not in request.headers.get("content-type", ""):
        return None
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", errors="replace")


def request_context(request: Request, exc: Any) -> RequestContext:
    """Extract the recordable parts of the request a failure occurred on."""
    body = None
    if settings.log_request_bodies:
        body = getattr(request.state, "request_body", None)
        if body is None:
            body = getattr(exc, "body", None)
    return RequestContext(
        path=_request_path(request),
        method=request.method,
        body=body,
        user=_user_identity(request),
    )


async def handle_failure(request: Request, exc: Exception) -> JSONResponse:
    """Render any failure as the standard error envelope.

    Args:
        request: The request being served when the failure was raised.
        exc: The unhandled failure.

    Returns:
        A JSON response carrying the envelope and the classified status.
    """
    failure = failure_from_exception(exc)
    result = classify(failure)
    context = request_context(request, exc)
    envelope = build_envelope(result, context.path, context.method)
    record_failure(failure, result, context)
    return JSONResponse(
        status_code=result.status, content=envelope.model_dump(mode="json")
    )


class FailureBoundaryMiddleware(BaseHTTPMiddleware):
    """Middleware that renders exceptions no typed handler claimed.

    Keeps the parsed JSON body on ``request.state`` so that any failure
    on the request can be recorded with it.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request and render any escaping exception."""
        try:
            if settings.log_request_bodies:
                request.state.request_body = await _parsed_body(request)
            return await call_next(request)
        except Exception as exc:  # noqa: BLE001
            return await handle_failure(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Register the failure boundary on the FastAPI application.

    One handler serves every exception family so that precedence is
    decided by the classifier, not by handler lookup order.

    Args:
        app: The FastAPI application instance.
    """
    for exc_class in HANDLED_EXCEPTIONS:
        app.add_exception_handler(exc_class, handle_failure)
    app.add_middleware(FailureBoundaryMiddleware)
