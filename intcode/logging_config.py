import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory


def configure_logging(log_level="INFO", json_logs=False, force=False):
    """Configure structured logging"""
    # Check if already configured
    if structlog.is_configured() and not force:
        return

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper(), logging.INFO),
        stream=sys.stderr,  # stdout carries the answers
        force=True,  # Override any root logger config
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
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
            renderer,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Loggers are created at import time; keep them reconfigurable
        cache_logger_on_first_use=False,
    )
    logger = structlog.get_logger(__name__)
    logger.debug("Logging configured", log_level=log_level, json_logs=json_logs)
