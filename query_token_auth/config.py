from functools import cached_property
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from query_token_auth.logging_config import get_logger, log_with_context
from query_token_auth.models.behaviors import QueryStringBehaviors
from query_token_auth.models.options import DEFAULT_PARAMETER_NAME, QueryStringOptions
from query_token_auth.services.query_redactor import DEFAULT_REDACTED_VALUE

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings with validation.

    Values come from environment variables or the .env file. The query
    string options are resolved once per Settings instance and shared
    read-only by every request.
    """

    # API server settings
    api_host: str = Field(min_length=1, default="127.0.0.1", description="API server host")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")

    # Static bearer token accepted by the demo application's protected routes
    api_key: str = Field(default="", description="API key expected as bearer token")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["text", "json"] = Field(default="text", description="Console log format")
    log_dir: Path | None = Field(default=None, description="Directory for rotating JSON logs")

    # Query string token authentication
    query_token_parameter_name: str = Field(
        default=DEFAULT_PARAMETER_NAME,
        description="Query string parameter carrying the bearer token",
    )
    query_token_behavior: Literal["redact", "none"] = Field(
        default="redact",
        description="Whether the token is redacted from the query string after extraction",
    )
    query_token_redacted_value: str = Field(
        default=DEFAULT_REDACTED_VALUE,
        description="Value written in place of the token when redacting",
    )
    query_token_redact_bare_key: bool = Field(
        default=False,
        description="Leave only the bare parameter name when redacting, ignoring the redacted value",
    )

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_host", "query_token_parameter_name", mode="after")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure the value is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v

    @field_validator("log_level", "log_format", "query_token_behavior", mode="before")
    @classmethod
    def normalize_case(cls, v: str, info: ValidationInfo) -> str:
        """Accept any capitalisation for enumerated settings."""
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == "log_level" else v.lower()

    @cached_property
    def query_string_options(self) -> QueryStringOptions:
        """Options for query string token authentication built from these settings."""
        if self.query_token_behavior == "none":
            behavior = QueryStringBehaviors.NONE
            log_with_context(
                logger,
                "warning",
                "Query string token redaction disabled; tokens will appear in request URLs",
                parameter_name=self.query_token_parameter_name,
                event_type="config_redaction_disabled",
            )
        elif self.query_token_redact_bare_key:
            behavior = QueryStringBehaviors.redact_with_value(None)
        elif self.query_token_redacted_value == DEFAULT_REDACTED_VALUE:
            behavior = QueryStringBehaviors.REDACT
        else:
            behavior = QueryStringBehaviors.redact_with_value(self.query_token_redacted_value)

        return QueryStringOptions(parameter_name=self.query_token_parameter_name, behavior=behavior)


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Returns:
        Cached Settings instance

    Example:
        @app.get("/")
        async def route(settings: Settings = Depends(get_settings)):
            return {"host": settings.api_host}
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
