"""Logging setup."""

import logging
import sys

from .config import get_settings

_configured = False


def configure_logging() -> None:
    """Configure root logging once from settings."""

    global _configured
    if _configured:
        return

    settings = get_settings()
    logging.basicConfig(
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )
    _configured = True
