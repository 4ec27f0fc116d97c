"""Outcomes of inspecting a request's query string for a bearer token."""

from pydantic import BaseModel, ConfigDict


class NotPresent(BaseModel):
    """The token parameter was not in the query string."""

    model_config = ConfigDict(frozen=True)


class Extracted(BaseModel):
    """Exactly one non-blank token value was found."""

    model_config = ConfigDict(frozen=True)

    token: str


class Rejected(BaseModel):
    """The token parameter was present but unusable."""

    model_config = ConfigDict(frozen=True)

    reason: str


ExtractionOutcome = NotPresent | Extracted | Rejected
