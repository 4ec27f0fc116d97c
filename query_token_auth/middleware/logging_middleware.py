"""HTTP access log middleware.

Logs the request URL with the configured redaction behavior applied. Requests
reaching here through ``QueryTokenMiddleware`` are already redacted; error
handlers running outside it see the raw query string and are redacted here.
"""

import time
import uuid

from fastapi import Request

from query_token_auth.logging_config import get_logger, log_with_context
from query_token_auth.models.options import OPTIONS_STATE_KEY, QueryStringOptions

logger = get_logger(__name__)


def loggable_url(request: Request) -> str:
    """Path plus redacted query string of the request, without scheme or host.

    Uses the options installed on the application, falling back to the
    default redaction when none are installed. Redaction is idempotent, so
    already-redacted query strings are unchanged.
    """
    app = request.scope.get("app")
    options = getattr(app.state, OPTIONS_STATE_KEY, None) if app is not None else None
    if options is None:
        options = QueryStringOptions()
    query = options.behavior.apply(request.url.query, options)
    return f"{request.url.path}?{query}" if query else request.url.path


async def access_log_middleware(request: Request, call_next):
    """Log each request's method, URL, status code and duration.

    A request ID is taken from the ``x-request-id`` header or generated, and
    echoed back on the response for tracing.
    """
    rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
    finally:
        dur_ms = round((time.perf_counter() - start) * 1000, 2)
        log_with_context(
            logger,
            "info",
            f"HTTP {request.method} {loggable_url(request)} -> {status_code}",
            request_id=rid,
            method=request.method,
            url=loggable_url(request),
            status_code=status_code,
            duration_ms=dur_ms,
            event_type="http_access",
        )
    response.headers["x-request-id"] = rid
    return response
