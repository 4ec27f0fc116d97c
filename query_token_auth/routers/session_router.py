"""Protected endpoint reporting how the caller authenticated."""

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from query_token_auth.models import SessionResponse
from query_token_auth.security import get_query_string_options, verify_api_key

router = APIRouter()

# Rate limiter for this router
limiter = Limiter(key_func=get_remote_address)


@router.get("/session", response_model=SessionResponse)
@limiter.limit("30/minute")
async def get_session(request: Request, source: str = Depends(verify_api_key)):
    """Return the authentication source of the current request.

    The bearer token may be sent either as ``Authorization: Bearer <key>`` or
    as the ``access_token`` query string parameter (name configurable via
    ``QUERY_TOKEN_PARAMETER_NAME``). The token itself is never echoed back.

    **Rate limited**: 30 requests per minute per IP.

    **Returns:**
    - 200: Token accepted
    - 401: Token missing, malformed, duplicated or invalid
    - 429: Too many requests
    """
    return SessionResponse(
        authenticated=True,
        source=source,
        parameter_name=get_query_string_options(request.app).parameter_name,
    )
