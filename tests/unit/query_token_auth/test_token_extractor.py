"""Tests for query string token extraction."""

import pytest

from query_token_auth.models.outcomes import Extracted, NotPresent, Rejected
from query_token_auth.services.token_extractor import TokenExtractor, extract_token, parse_query


def multiple_message(name: str, count: str) -> str:
    return f"Only one '{name}' query string parameter can be defined. However, {count} were included in the request."


def blank_message(name: str) -> str:
    return f"The '{name}' query string parameter was defined, but a value to represent the token was not included."


class TestParseQuery:
    """Tests for parse_query."""

    @pytest.mark.parametrize("raw", [None, "", "?", b""])
    def test_empty_inputs(self, raw):
        """Test that empty query strings parse to an empty mapping."""
        assert parse_query(raw) == {}

    def test_preserves_first_appearance_order(self):
        """Test keys keep the order in which they first appear."""
        query = parse_query("?b=1&a=2&b=3")

        assert list(query) == ["b", "a"]
        assert query["b"] == ["1", "3"]

    def test_key_without_equals_has_empty_value(self):
        """Test a bare key maps to an empty string."""
        assert parse_query("access_token") == {"access_token": [""]}

    def test_bytes_are_percent_decoded(self):
        """Test ASGI byte query strings are decoded like Starlette does."""
        assert parse_query(b"access_token=a%2Bb%20c") == {"access_token": ["a+b c"]}

    def test_names_are_case_sensitive(self):
        """Test differently cased names stay distinct."""
        query = parse_query("Access_Token=x&access_token=y")

        assert query == {"Access_Token": ["x"], "access_token": ["y"]}


class TestExtractToken:
    """Tests for extract_token decisions."""

    @pytest.mark.parametrize("raw", [None, "", "?", "?other=1", "?Access_Token=abc", "?access_tokens=abc"])
    def test_not_present(self, raw):
        """Test queries without the parameter yield NotPresent."""
        assert extract_token(parse_query(raw), "access_token") == NotPresent()

    def test_extracted(self):
        """Test a single value is extracted."""
        assert extract_token(parse_query("?access_token=abc123"), "access_token") == Extracted(token="abc123")

    def test_extracted_verbatim(self):
        """Test the value is not trimmed or case-changed."""
        outcome = extract_token(parse_query("?access_token=%20AbC%20"), "access_token")

        assert outcome == Extracted(token=" AbC ")

    def test_extracted_alongside_other_parameters(self):
        """Test other parameters do not affect extraction."""
        outcome = extract_token(parse_query("?page=2&access_token=tok&sort=asc"), "access_token")

        assert outcome == Extracted(token="tok")

    def test_multiple_values_rejected(self):
        """Test duplicated parameters are rejected with the count."""
        outcome = extract_token(parse_query("?access_token=abc&access_token=def"), "access_token")

        assert outcome == Rejected(reason=multiple_message("access_token", "2"))

    def test_multiple_values_rejected_even_if_blank(self):
        """Test duplicates win over the blank check."""
        outcome = extract_token(parse_query("?access_token=&access_token="), "access_token")

        assert outcome == Rejected(reason=multiple_message("access_token", "2"))

    def test_count_uses_thousands_separator(self):
        """Test large counts are formatted with thousands separators."""
        query = {"access_token": ["x"] * 1234}

        assert extract_token(query, "access_token") == Rejected(reason=multiple_message("access_token", "1,234"))

    @pytest.mark.parametrize("raw", ["?access_token", "?access_token=", "?access_token=%20", "?access_token=+%09+"])
    def test_blank_value_rejected(self, raw):
        """Test empty and whitespace-only values are rejected."""
        outcome = extract_token(parse_query(raw), "access_token")

        assert outcome == Rejected(reason=blank_message("access_token"))

    def test_none_value_rejected(self):
        """Test a None value from a custom mapping is rejected."""
        assert extract_token({"access_token": [None]}, "access_token") == Rejected(reason=blank_message("access_token"))

    def test_custom_parameter_name(self):
        """Test a custom parameter name appears in the reason."""
        outcome = extract_token(parse_query("?bearer=a&bearer=b&bearer=c"), "bearer")

        assert outcome == Rejected(reason=multiple_message("bearer", "3"))


class TestTokenExtractor:
    """Tests for the TokenExtractor class."""

    def test_default_parameter_name(self):
        """Test the RFC 6750 parameter name is the default."""
        assert TokenExtractor().parameter_name == "access_token"

    def test_extract_uses_configured_name(self):
        """Test the configured name is looked up."""
        extractor = TokenExtractor("custom-parameter")

        assert extractor.extract(parse_query("?custom-parameter=tok")) == Extracted(token="tok")
        assert extractor.extract(parse_query("?access_token=tok")) == NotPresent()

    def test_none_parameter_name_raises(self):
        """Test a None parameter name is a configuration error."""
        with pytest.raises(TypeError):
            TokenExtractor(None)

    @pytest.mark.parametrize("name", ["", " ", "\t\n"])
    def test_blank_parameter_name_raises(self, name):
        """Test blank parameter names are rejected at construction."""
        with pytest.raises(ValueError, match="cannot be null or whitespace"):
            TokenExtractor(name)
