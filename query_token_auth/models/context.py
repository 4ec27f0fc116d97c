"""Per-request authentication state shared along the handler chain."""

from collections.abc import Mapping


class AuthenticationContext:
    """Mutable view of one request as seen by the authentication handlers.

    Holds the parsed query, the request headers, the token slot, the
    response status code and the failure reason. A new instance is created
    for every request and never shared.
    """

    def __init__(
        self,
        query: Mapping[str, list[str]] | None = None,
        headers: Mapping[str, str] | None = None,
    ):
        self.query: Mapping[str, list[str]] = query or {}
        self.headers: Mapping[str, str] = headers or {}
        self.status_code: int | None = None
        self.failure: str | None = None
        self._token: str | None = None

    @property
    def token(self) -> str | None:
        """Token found for this request, if any."""
        return self._token

    @token.setter
    def token(self, value: str) -> None:
        if self._token is not None:
            raise RuntimeError("The authentication token was already set for this request")
        self._token = value

    @property
    def failed(self) -> bool:
        return self.failure is not None

    def fail(self, reason: str) -> None:
        """Mark authentication as failed for this request."""
        self.failure = reason
