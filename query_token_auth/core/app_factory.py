"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from query_token_auth import __version__
from query_token_auth.config import Settings, get_settings
from query_token_auth.core.lifespan import lifespan
from query_token_auth.core.middleware import setup_middleware
from query_token_auth.middleware.error_handlers import register_error_handlers
from query_token_auth.routers import health_router, session_router
from query_token_auth.security import get_query_string_options


def custom_openapi(app: FastAPI):
    """Generate custom OpenAPI schema with header and query string bearer schemes."""
    if app.openapi_schema:
        return app.openapi_schema

    from fastapi.openapi.utils import get_openapi

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    parameter_name = get_query_string_options(app).parameter_name
    openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {}).update({
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "description": "API key sent as 'Authorization: Bearer <key>'",
        },
        "QueryStringToken": {
            "type": "apiKey",
            "in": "query",
            "name": parameter_name,
            "description": f"API key sent as the '{parameter_name}' query string parameter (RFC 6750 section 2.3)",
        },
    })

    # Either scheme satisfies the API endpoints
    for path, path_item in openapi_schema.get("paths", {}).items():
        if not path.startswith("/api/"):
            continue
        for method, operation in path_item.items():
            if method in ["get", "post", "put", "delete", "patch"]:
                operation["security"] = [{"BearerAuth": []}, {"QueryStringToken": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the process-wide singleton)

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Query Token Auth API",
        description="""
        Bearer token authentication that also accepts the token from the query string.

        ## Authentication
        Send the API key either way:
        - `Authorization: Bearer YOUR_API_KEY`
        - `?access_token=YOUR_API_KEY` (parameter name configurable)

        If the query string parameter is present it takes precedence over the
        header, even when it is invalid. After extraction the token is replaced
        with `(REDACTED)` in the query string so it never reaches the access log.
        """,
        version=__version__,
        lifespan=lifespan,
    )

    # Configure middleware
    setup_middleware(app, settings)

    # Register exception handlers
    register_error_handlers(app)

    # Include routers
    app.include_router(health_router.router, tags=["health"])
    app.state.limiter = session_router.limiter
    app.include_router(session_router.router, prefix="/api", tags=["session"])

    # Custom OpenAPI schema
    app.openapi = lambda: custom_openapi(app)

    return app
