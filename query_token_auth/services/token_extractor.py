"""Bearer token extraction from the query string (RFC 6750 section 2.3)."""

from collections.abc import Mapping, Sequence
from urllib.parse import parse_qsl

from query_token_auth.models.options import DEFAULT_PARAMETER_NAME
from query_token_auth.models.outcomes import Extracted, ExtractionOutcome, NotPresent, Rejected
from query_token_auth.services.parameters import validate_parameter_name

RequestQuery = Mapping[str, Sequence[str | None]]


def parse_query(query_string: str | bytes | None) -> dict[str, list[str]]:
    """Parse a raw query string into an ordered multimap.

    Keys keep their order of first appearance. A key written without "="
    maps to an empty string value.

    Args:
        query_string: Raw query string, with or without the leading "?"

    Returns:
        Dictionary of parameter name to list of decoded values
    """
    if not query_string:
        return {}
    if isinstance(query_string, bytes):
        query_string = query_string.decode("latin-1")
    query_string = query_string.removeprefix("?")

    query: dict[str, list[str]] = {}
    for key, value in parse_qsl(query_string, keep_blank_values=True):
        query.setdefault(key, []).append(value)
    return query


def extract_token(query: RequestQuery, parameter_name: str) -> ExtractionOutcome:
    """Decide what the query string says about the bearer token.

    Args:
        query: Parsed query parameters
        parameter_name: Name of the parameter carrying the token

    Returns:
        NotPresent if the parameter is missing, Rejected if it occurs more
        than once or has a blank value, otherwise Extracted with the value as-is
    """
    values = query.get(parameter_name)
    if values is None:
        return NotPresent()

    if len(values) > 1:
        return Rejected(
            reason=(
                f"Only one '{parameter_name}' query string parameter can be "
                f"defined. However, {len(values):,} were included in the request."
            )
        )

    token = values[0] if values else None
    if token is None or not token.strip():
        return Rejected(
            reason=(
                f"The '{parameter_name}' query string parameter was defined, "
                f"but a value to represent the token was not included."
            )
        )

    return Extracted(token=token)


class TokenExtractor:
    """Extracts the bearer token from a configured query string parameter."""

    def __init__(self, parameter_name: str = DEFAULT_PARAMETER_NAME):
        self.parameter_name = validate_parameter_name(parameter_name)

    def extract(self, query: RequestQuery) -> ExtractionOutcome:
        return extract_token(query, self.parameter_name)
