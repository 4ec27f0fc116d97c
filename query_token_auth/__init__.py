"""Query-string bearer token authentication for FastAPI / Starlette."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("query-token-auth")
except PackageNotFoundError:
    __version__ = "dev"
