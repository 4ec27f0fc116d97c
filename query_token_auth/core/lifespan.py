"""Application lifespan management."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from query_token_auth import __version__
from query_token_auth.logging_config import get_logger, log_with_context
from query_token_auth.security import get_query_string_options

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions raised after yield are logged and re-raised.
    """
    app.state.startup_time = time.time()

    options = get_query_string_options(app)
    log_with_context(
        logger,
        "info",
        "Starting query token authentication service",
        version=__version__,
        parameter_name=options.parameter_name,
        behavior=options.behavior.kind,
        event_type="app_startup",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down query token authentication service",
            uptime_seconds=round(time.time() - app.state.startup_time, 2),
            event_type="app_shutdown",
        )
