"""Redaction of a single parameter's value from a URL query string.

Only the segments belonging to the targeted parameter are rewritten. Every
other ``key=value`` segment is copied through verbatim so its original
encoding and position survive.
"""

from urllib.parse import quote, unquote_plus

from query_token_auth.services.parameters import validate_parameter_name

DEFAULT_REDACTED_VALUE = "(REDACTED)"

# RFC 3986 sub-delims that are legal inside a query component, minus the
# separators "&", "=", "+" and ";" that parsers treat specially.
_QUERY_SAFE = "!$'()*,:@/?"


def _segment_key(segment: str) -> str:
    raw_key = segment.split("=", 1)[0]
    return unquote_plus(raw_key)


def redact_query(query_string: str | None, parameter_name: str, replacement: str | None) -> str | None:
    """Replace every value of ``parameter_name`` with a single ``replacement``.

    Args:
        query_string: Raw query string, with or without the leading "?"
        parameter_name: Case-sensitive parameter name to redact
        replacement: Value written in place of the token; None leaves a bare key

    Returns:
        The rewritten query string. If the parameter does not occur, the
        input object itself is returned.
    """
    if not query_string or query_string == "?":
        return query_string

    prefix = "?" if query_string.startswith("?") else ""
    segments = query_string[len(prefix):].split("&")

    rewritten: list[str] = []
    matched = False

    for segment in segments:
        if not segment or _segment_key(segment) != parameter_name:
            rewritten.append(segment)
            continue

        if matched:
            # Collapse repeated occurrences into the first one
            continue

        matched = True
        raw_key = segment.split("=", 1)[0]
        if replacement is None:
            rewritten.append(raw_key)
        else:
            rewritten.append(f"{raw_key}={quote(replacement, safe=_QUERY_SAFE)}")

    if not matched:
        return query_string

    return prefix + "&".join(rewritten)


class QueryRedactor:
    """Redacts one configured parameter from query strings.

    Configuration is validated once at construction; ``redact`` itself never
    raises for any query string shape.
    """

    def __init__(self, parameter_name: str, replacement: str | None = DEFAULT_REDACTED_VALUE):
        self.parameter_name = validate_parameter_name(parameter_name)
        self.replacement = replacement

    def redact(self, query_string: str | None) -> str | None:
        return redact_query(query_string, self.parameter_name, self.replacement)
