"""Main FastAPI application entry point."""

from pathlib import Path

from dotenv import load_dotenv

from query_token_auth.config import get_settings
from query_token_auth.core.app_factory import create_app
from query_token_auth.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

settings = get_settings()

# Configure structured logging (console, plus JSON file when LOG_DIR is set)
setup_logging(settings.log_level, settings.log_format, settings.log_dir)

# Create application
app = create_app(settings)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Query Token Auth API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "query_token_auth.main:app",
        host=settings.api_host,
        port=settings.api_port,
        access_log=False,
    )
