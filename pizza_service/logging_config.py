"""
Logging configuration for the pizza service.

Usage:
    from pizza_service.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)

Every handler installed here carries a TokenRedactingFilter, so a bearer
token or JWT that ends up in a log message is masked before it is written.
"""
import logging
import os
import re
import sys

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_JWT_RE = re.compile(r"\beyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+")
_BEARER_RE = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)


class TokenRedactingFilter(logging.Filter):
    """Mask JWTs and bearer credentials in formatted log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _BEARER_RE.sub(r"\1[redacted]", _JWT_RE.sub("[redacted]", message))
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


def setup_logging(level: str = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, reads from LOG_LEVEL env var, defaults to INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()

    if level not in VALID_LEVELS:
        level = "INFO"

    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, TokenRedactingFilter) for f in handler.filters):
            handler.addFilter(TokenRedactingFilter())

    logging.getLogger("pizza_service").setLevel(numeric_level)

    # Request and SQL logs from dependencies only at DEBUG
    if level != "DEBUG":
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured at %s level", level)
