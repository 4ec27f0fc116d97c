"""Middleware configuration."""

from collections.abc import Callable
from typing import Any

from fastapi import FastAPI
from pydantic import ValidationError
from slowapi.middleware import SlowAPIMiddleware

from query_token_auth.config import Settings
from query_token_auth.exceptions import ConfigurationException, ErrorCode
from query_token_auth.logging_config import get_logger, log_with_context
from query_token_auth.middleware.logging_middleware import access_log_middleware
from query_token_auth.middleware.query_token_middleware import QueryTokenMiddleware
from query_token_auth.models.options import OPTIONS_STATE_KEY, QueryStringOptions

logger = get_logger(__name__)


def add_query_string_authentication(
    app: FastAPI,
    options: QueryStringOptions | None = None,
    configure: Callable[[dict[str, Any]], None] | None = None,
) -> QueryStringOptions:
    """Enable query string bearer tokens on ``app``.

    Options are resolved once here and stored on ``app.state`` so that
    ``QueryStringBearer`` uses the same parameter name as the middleware.

    Args:
        app: FastAPI application instance
        options: Options to install (defaults to ``QueryStringOptions()``)
        configure: Callback that edits the option fields before they are frozen

    Returns:
        The installed options

    Raises:
        ConfigurationException: If the app is missing, ``configure`` is not
            callable or the configured options are invalid

    Example:
        add_query_string_authentication(
            app, configure=lambda o: o.update(behavior=QueryStringBehaviors.NONE)
        )
    """
    if app is None:
        raise ConfigurationException("app cannot be None", code=ErrorCode.CONFIG_MISSING)
    if configure is not None and not callable(configure):
        raise ConfigurationException("configure must be callable", code=ErrorCode.CONFIG_INVALID)

    if options is None:
        options = QueryStringOptions()
    if configure is not None:
        fields = dict(options)
        configure(fields)
        try:
            options = QueryStringOptions(**fields)
        except ValidationError as e:
            raise ConfigurationException(
                f"Invalid query string authentication options: {e.error_count()} error(s)",
                code=ErrorCode.CONFIG_INVALID,
                details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
            ) from e

    setattr(app.state, OPTIONS_STATE_KEY, options)
    app.add_middleware(QueryTokenMiddleware, options=options)

    log_with_context(
        logger,
        "info",
        "Configuring query string token authentication",
        event_type="security_config",
        parameter_name=options.parameter_name,
        behavior=options.behavior.kind,
    )
    return options


def setup_middleware(app: FastAPI, settings: Settings) -> QueryStringOptions:
    """Configure all middleware for the application.

    Middleware is registered innermost first. Rate limiting runs before
    route dependencies so failed authentication attempts count towards the
    limit, and the access log runs inside the query token middleware so it
    only ever sees the redacted query string.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        The installed query string options
    """
    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(access_log_middleware)

    return add_query_string_authentication(app, settings.query_string_options)
