"""
Structured logging setup.
"""
import logging
from typing import Optional

import structlog

from .config import settings


def configure_logging(log_level: Optional[str] = None, json_logs: Optional[bool] = None):
    """
    Configure structured logging.

    Development environments get the human-readable console renderer,
    everything else emits one JSON object per line.
    """
    level = log_level or settings.log_level
    if json_logs is None:
        json_logs = not settings.is_development

    logging.basicConfig(
        format="%(message)s",
        stream=None,
        level=getattr(logging, level.upper()),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
