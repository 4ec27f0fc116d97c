"""Query string mutation behaviors applied after token extraction."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from query_token_auth.services.query_redactor import DEFAULT_REDACTED_VALUE, redact_query

if TYPE_CHECKING:
    from query_token_auth.models.options import QueryStringOptions


class NoRedaction(BaseModel):
    """Leaves the request's query string untouched.

    Not recommended for production: the token stays visible to anything that
    logs the request URL. Useful in development and test setups.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"

    @property
    def redacts(self) -> bool:
        return False

    def apply(self, query_string: str | None, options: QueryStringOptions) -> str | None:
        """Return the query string unchanged."""
        return query_string


class Redact(BaseModel):
    """Replaces every value of the token parameter with ``replacement``.

    The parameter key stays in the query string so logs still show that the
    caller authenticated through the query string. A ``None`` replacement
    leaves the bare key behind.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["redact"] = "redact"
    replacement: str | None = DEFAULT_REDACTED_VALUE

    @property
    def redacts(self) -> bool:
        return True

    def apply(self, query_string: str | None, options: QueryStringOptions) -> str | None:
        """Redact ``options.parameter_name`` from the query string.

        Args:
            query_string: Raw query string, with or without the leading "?"
            options: Options naming the parameter to redact

        Returns:
            The rewritten query string, or the input itself if the parameter is absent
        """
        return redact_query(query_string, options.parameter_name, self.replacement)


RedactionBehavior = Annotated[NoRedaction | Redact, Field(discriminator="kind")]


class QueryStringBehaviors:
    """Stock behaviors for ``QueryStringOptions.behavior``."""

    #: Replace the token with "(REDACTED)". This is the default.
    REDACT: Redact = Redact()

    #: Perform no mutation of the request.
    NONE: NoRedaction = NoRedaction()

    @staticmethod
    def redact_with_value(redacted_value: str | None) -> Redact:
        """Build a behavior that puts ``redacted_value`` in place of the token."""
        return Redact(replacement=redacted_value)
