"""Logging setup shared by the web app and the CLI.

Library code logs through ``logging.getLogger(__name__)`` or
``structlog.get_logger()``; this module decides where both end up.
"""

import logging
import sys

import structlog

from armory.core.config import LoggingSettings


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure stdlib logging and structlog.

    Call this once at application startup.

    Args:
        settings: Logging settings (defaults when omitted)
    """
    cfg = settings or LoggingSettings()
    level = getattr(logging, cfg.level)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,  # Replace any existing logging configuration
    )

    renderer: structlog.types.Processor
    if cfg.json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
