"""
CORS Middleware Configuration.

The API is read-only, so only GET (and the preflight OPTIONS) is allowed.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def parse_origins(raw: str) -> list[str]:
    """
    Split a comma-separated origin list, "*" when empty.

    Examples:
        >>> parse_origins("http://a.test, http://b.test")
        ['http://a.test', 'http://b.test']
        >>> parse_origins("")
        ['*']
    """
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def add_cors(app: FastAPI, origins: str) -> None:
    """
    Allow cross-origin reads of the listing API.

    Args:
        app: FastAPI application instance
        origins: Comma-separated allowed origins (CORS_ORIGINS)
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_origins(origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )
