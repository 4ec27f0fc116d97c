"""ASGI middleware that reads the bearer token from the query string and redacts it."""

from starlette.types import ASGIApp, Receive, Scope, Send

from query_token_auth.logging_config import get_logger, log_with_context
from query_token_auth.models.context import AuthenticationContext
from query_token_auth.models.options import QueryStringOptions
from query_token_auth.services.token_extractor import parse_query
from query_token_auth.services.token_handler import MessageReceivedHandler, QueryStringTokenHandler

logger = get_logger(__name__)

STATE_KEY = "query_token"


class QueryTokenMiddleware:
    """Runs query string token extraction, then applies the redaction behavior.

    The resulting ``AuthenticationContext`` is stored on the request state
    (``request.state.query_token``) before the query string is rewritten, so
    downstream authentication still sees the token while everything else,
    access logs included, only sees the redacted query string.

    Usage:
        app.add_middleware(QueryTokenMiddleware, options=QueryStringOptions())
    """

    def __init__(
        self,
        app: ASGIApp,
        options: QueryStringOptions | None = None,
        inner: MessageReceivedHandler | None = None,
    ):
        if app is None:
            raise TypeError("app cannot be None")
        self.app = app
        self.options = options or QueryStringOptions()
        self.handler = QueryStringTokenHandler(inner, self.options.parameter_name)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        raw_query = scope.get("query_string", b"")
        context = AuthenticationContext(
            query=parse_query(raw_query),
            headers={k.decode("latin-1"): v.decode("latin-1") for k, v in scope.get("headers", [])},
        )
        self.handler(context)

        scope.setdefault("state", {})[STATE_KEY] = context

        behavior = self.options.behavior
        if behavior.redacts:
            query_string = raw_query.decode("latin-1")
            redacted = behavior.apply(query_string, self.options)
            if redacted is not query_string:
                scope = dict(scope)
                scope["query_string"] = redacted.encode("latin-1")
                log_with_context(
                    logger,
                    "debug",
                    "Redacted token from query string",
                    parameter_name=self.options.parameter_name,
                    path=scope.get("path"),
                    event_type="query_token_redacted",
                )

        await self.app(scope, receive, send)
