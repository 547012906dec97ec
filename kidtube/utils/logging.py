"""
Logging utilities for the KidTube backend.

Provides standardized logger configuration.

LOGGING RULES:
- NEVER log API keys (Gemini or YouTube), including inside request URLs
- NEVER log the access-gate password, even when it is wrong
- Children's profiles are logged only as age, gender label and interests

Acceptable logging:
- Pipeline stage transitions (e.g., "Calling Gemini", "Searching YouTube")
- Synthesized search queries and result counts
- Error types and sanitized error messages
"""

import logging
import re
from typing import Optional

# httpx logs every request URL at INFO; YouTube URLs carry the key as a query param
_KEY_PARAM = re.compile(r"([?&]key=)[^&\s\"']+")

REDACTED = "[REDACTED]"


def redact_secrets(text: str) -> str:
    """Replace `key=` query parameter values in a URL or log line."""
    return _KEY_PARAM.sub(rf"\1{REDACTED}", text)


class SecretRedactingFilter(logging.Filter):
    """Scrub API keys from log records before any handler sees them."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def install_redaction(*logger_names: str) -> None:
    """Attach SecretRedactingFilter to the given loggers (once each)."""
    for name in logger_names:
        target = logging.getLogger(name)
        if not any(isinstance(f, SecretRedactingFilter) for f in target.filters):
            target.addFilter(SecretRedactingFilter())


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for a route module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Usage:
        >>> from kidtube.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Health check endpoint called")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        handler.addFilter(SecretRedactingFilter())
        logger.addHandler(handler)

    return logger
