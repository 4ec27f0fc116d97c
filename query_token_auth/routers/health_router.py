"""Health endpoint."""

from fastapi import APIRouter

from query_token_auth import __version__
from query_token_auth.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint for container probes."""
    return HealthResponse(status="ok", version=__version__)
