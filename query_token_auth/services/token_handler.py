"""Message-received handler that reads the bearer token from the query string.

Handlers take an ``AuthenticationContext``; their return value is ignored by
the chain. They compose by wrapping: each handler does its own work and then
calls the handler it wraps.
"""

from collections.abc import Callable

from fastapi import status

from query_token_auth.logging_config import get_logger, log_with_context
from query_token_auth.models.context import AuthenticationContext
from query_token_auth.models.options import DEFAULT_PARAMETER_NAME
from query_token_auth.models.outcomes import Extracted, ExtractionOutcome, Rejected
from query_token_auth.services.token_extractor import TokenExtractor

logger = get_logger(__name__)

MessageReceivedHandler = Callable[[AuthenticationContext], None]


def message_received(context: AuthenticationContext) -> None:
    """Default handler: does nothing."""


class QueryStringTokenHandler:
    """Looks for the token in the query string, then delegates to ``inner``.

    If the parameter is present it always wins over the Authorization header,
    even when its value is invalid and the header's token would be valid.
    The inner handler runs regardless of the outcome.
    """

    def __init__(
        self,
        inner: MessageReceivedHandler | None = None,
        parameter_name: str = DEFAULT_PARAMETER_NAME,
    ):
        if inner is not None and not callable(inner):
            raise TypeError("inner must be callable")
        self.inner: MessageReceivedHandler = inner or message_received
        self.extractor = TokenExtractor(parameter_name)

    @property
    def parameter_name(self) -> str:
        return self.extractor.parameter_name

    def __call__(self, context: AuthenticationContext) -> ExtractionOutcome:
        outcome = self.extractor.extract(context.query)

        if isinstance(outcome, Rejected):
            context.status_code = status.HTTP_401_UNAUTHORIZED
            context.fail(outcome.reason)
            log_with_context(
                logger,
                "warning",
                "Query string token rejected",
                parameter_name=self.parameter_name,
                reason=outcome.reason,
                event_type="query_token_rejected",
            )
        elif isinstance(outcome, Extracted):
            context.token = outcome.token
            log_with_context(
                logger,
                "debug",
                "Token read from query string",
                parameter_name=self.parameter_name,
                event_type="query_token_extracted",
            )

        self.inner(context)
        return outcome


def wrap_handler(
    inner: MessageReceivedHandler | None = None,
    parameter_name: str = DEFAULT_PARAMETER_NAME,
) -> QueryStringTokenHandler:
    """Add query string token extraction in front of an existing handler.

    Args:
        inner: Handler to run after extraction (a no-op if None)
        parameter_name: Query string parameter carrying the token

    Returns:
        A handler that extracts the token and then calls ``inner``
    """
    return QueryStringTokenHandler(inner, parameter_name)
