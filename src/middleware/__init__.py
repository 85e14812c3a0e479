"""
Middleware Module.

Cross-origin access for the dashboard and request access logging.
"""

from fastapi import FastAPI

from config.settings import Settings
from src.middleware.access_log import AccessLogMiddleware
from src.middleware.cors import add_cors


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Register middleware on the application.

    Starlette runs the last registered middleware first, so access
    logging wraps CORS and sees the final status code.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    add_cors(app, settings.cors_origins)
    app.add_middleware(AccessLogMiddleware)


__all__ = ["AccessLogMiddleware", "add_cors", "setup_middleware"]
