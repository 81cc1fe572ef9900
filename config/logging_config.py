"""
Structured logging setup.

Call configure_logging() once at process start. Modules only ever do
structlog.get_logger(__name__).
"""

import logging
import sys
from typing import Optional

import structlog

from config.settings import Settings, get_settings


def configure_logging(app_settings: Optional[Settings] = None) -> None:
    """
    Configure structlog on top of the standard library logger.

    Production (or log_json=True) renders JSON lines; everything else
    uses the colored console renderer.

    Args:
        app_settings: Settings to use (defaults to the cached instance)
    """
    app_settings = app_settings or get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, app_settings.log_level),
        force=True,
    )

    use_json = app_settings.is_production or app_settings.log_json

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if use_json
                else structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
