"""Logging setup for host applications embedding the advisor.

The library itself only calls ``logging.getLogger(__name__)``; wiring handlers
and the structlog bridge is left to whoever owns the process.
"""

from __future__ import annotations

import logging
import sys

import structlog

from credit_advisor.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging and structlog with the stdlib bridge.

    Args:
        level: Level name override. Defaults to ``settings.log_level``.
    """
    level_name = (level or settings.log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name),
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
