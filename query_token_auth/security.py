"""FastAPI security dependencies for query-string bearer token authentication."""

import secrets

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from query_token_auth.config import Settings, get_settings
from query_token_auth.exceptions import AuthenticationException, ErrorCode
from query_token_auth.logging_config import get_logger, log_with_context
from query_token_auth.middleware.logging_middleware import loggable_url
from query_token_auth.middleware.query_token_middleware import STATE_KEY
from query_token_auth.models.context import AuthenticationContext
from query_token_auth.models.options import OPTIONS_STATE_KEY, QueryStringOptions
from query_token_auth.services.token_extractor import parse_query
from query_token_auth.services.token_handler import QueryStringTokenHandler

logger = get_logger(__name__)


def get_query_string_options(app: FastAPI) -> QueryStringOptions:
    """Options installed on the application, or the defaults."""
    return getattr(app.state, OPTIONS_STATE_KEY, None) or QueryStringOptions()


class QueryStringBearer(HTTPBearer):
    """Bearer scheme that accepts the token from the query string or the header.

    When ``QueryTokenMiddleware`` is installed the extraction it already did is
    reused; otherwise the query string is inspected here. A token parameter in
    the query string always takes precedence over the Authorization header,
    and a malformed one is rejected with 401 even if the header is valid.
    """

    def __init__(self, options: QueryStringOptions | None = None, *, auto_error: bool = True, **kwargs):
        super().__init__(auto_error=auto_error, **kwargs)
        self.options = options

    def authentication_context(self, request: Request) -> AuthenticationContext:
        """Return the request's authentication context, extracting the token if needed."""
        context = getattr(request.state, STATE_KEY, None)
        if context is not None:
            return context

        options = self.options or get_query_string_options(request.app)
        context = AuthenticationContext(
            query=parse_query(request.scope.get("query_string", b"")),
            headers=dict(request.headers),
        )
        QueryStringTokenHandler(parameter_name=options.parameter_name)(context)
        setattr(request.state, STATE_KEY, context)
        return context

    async def __call__(self, request: Request) -> HTTPAuthorizationCredentials | None:
        context = self.authentication_context(request)

        if context.failed:
            if not self.auto_error:
                return None
            raise HTTPException(
                status_code=context.status_code or status.HTTP_401_UNAUTHORIZED,
                detail=context.failure,
                headers={"WWW-Authenticate": "Bearer"},
            )

        if context.token is not None:
            return HTTPAuthorizationCredentials(scheme="Bearer", credentials=context.token)

        return await super().__call__(request)


query_string_bearer = QueryStringBearer(auto_error=False)


def token_source(request: Request) -> str:
    """Report whether the request's token came from the query string or the header."""
    context = getattr(request.state, STATE_KEY, None)
    return "query" if context is not None and context.token is not None else "header"


async def verify_api_key(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(query_string_bearer),
    settings: Settings = Depends(get_settings),
) -> str:
    """Verify the bearer token against the configured API key.

    Args:
        request: The FastAPI request object
        credentials: Bearer credentials from the query string or header
        settings: Settings instance with the API key from .env

    Returns:
        Where the accepted token was read from ("query" or "header")

    Raises:
        AuthenticationException: If the key is not configured, missing or invalid

    Example:
        GET /api/session?access_token=your-api-key
        Authorization: Bearer your-api-key
    """
    context = getattr(request.state, STATE_KEY, None)
    if context is not None and context.failed:
        raise AuthenticationException(
            context.failure,
            code=ErrorCode.TOKEN_REJECTED,
            details={"parameter_name": get_query_string_options(request.app).parameter_name},
        )

    if not settings.api_key:
        log_with_context(
            logger,
            "error",
            "API_KEY not configured",
            event_type="security_error",
            path=loggable_url(request),
        )
        raise AuthenticationException("Authentication not configured - API_KEY environment variable is missing")

    if credentials is None:
        log_with_context(
            logger,
            "warning",
            "Missing bearer token",
            event_type="auth_failure",
            path=loggable_url(request),
            ip=request.client.host if request.client else "unknown",
        )
        raise AuthenticationException("Missing bearer token")

    if not secrets.compare_digest(credentials.credentials.encode(), settings.api_key.encode()):
        log_with_context(
            logger,
            "warning",
            "Invalid bearer token",
            event_type="auth_failure",
            path=loggable_url(request),
            ip=request.client.host if request.client else "unknown",
        )
        raise AuthenticationException("Invalid bearer token", code=ErrorCode.TOKEN_REJECTED)

    source = token_source(request)
    log_with_context(
        logger,
        "debug",
        "Bearer token verified",
        event_type="auth_success",
        source=source,
        path=loggable_url(request),
    )
    return source
