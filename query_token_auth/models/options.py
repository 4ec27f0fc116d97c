"""Options controlling query-string token authentication."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from query_token_auth.models.behaviors import QueryStringBehaviors, RedactionBehavior
from query_token_auth.services.parameters import validate_parameter_name

# RFC 6750 section 2.3 names the parameter "access_token"
DEFAULT_PARAMETER_NAME = "access_token"

# Attribute of app.state holding the installed QueryStringOptions
OPTIONS_STATE_KEY = "query_token_options"


class QueryStringOptions(BaseModel):
    """How the query string is inspected and mutated for every request.

    Instances are frozen and shared read-only across concurrent requests.
    """

    model_config = ConfigDict(frozen=True)

    parameter_name: str = Field(
        default=DEFAULT_PARAMETER_NAME,
        description="Query string parameter carrying the bearer token",
    )
    behavior: RedactionBehavior = Field(
        default=QueryStringBehaviors.REDACT,
        description="Mutation applied to the query string after extraction",
    )

    @field_validator("parameter_name", mode="after")
    @classmethod
    def parameter_name_not_blank(cls, v: str) -> str:
        """Ensure parameter_name is not empty or whitespace."""
        return validate_parameter_name(v)
