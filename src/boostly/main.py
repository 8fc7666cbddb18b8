"""FastAPI application entrypoint for Boostly."""

from fastapi import FastAPI

from . import __version__
from .api.v1.router import api_router
from .core.config import get_settings
from .core.errors import register_error_handlers
from .core.logging import configure_logging
from .jobs import register_scheduler


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    configure_logging()
    settings = get_settings()
    app = FastAPI(title="Boostly API", version=__version__)
    app.include_router(api_router, prefix=settings.api_prefix)
    register_error_handlers(app)
    register_scheduler(app)
    return app


app = create_app()
