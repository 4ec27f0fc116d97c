"""Query token authentication models"""

from query_token_auth.models.base_models import HealthResponse, SessionResponse
from query_token_auth.models.behaviors import NoRedaction, QueryStringBehaviors, Redact, RedactionBehavior
from query_token_auth.models.context import AuthenticationContext
from query_token_auth.models.options import DEFAULT_PARAMETER_NAME, QueryStringOptions
from query_token_auth.models.outcomes import Extracted, ExtractionOutcome, NotPresent, Rejected

__all__ = [
    "AuthenticationContext",
    "DEFAULT_PARAMETER_NAME",
    "Extracted",
    "ExtractionOutcome",
    "HealthResponse",
    "NoRedaction",
    "NotPresent",
    "QueryStringBehaviors",
    "QueryStringOptions",
    "Redact",
    "RedactionBehavior",
    "Rejected",
    "SessionResponse",
]
