"""Pydantic models for response validation."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class SessionResponse(BaseModel):
    """Describes how the current request authenticated."""

    authenticated: bool = Field(..., description="Whether the bearer token was accepted")
    source: Literal["query", "header"] = Field(..., description="Where the bearer token was read from")
    parameter_name: str = Field(..., description="Query string parameter checked for a token")
