"""Logging for the relay.

This module provides:
- PlainFormatter for local, human-readable output
- JSONFormatter for structured logs (one JSON object per line)
- setup_logging() to install a single stderr handler on the root logger

Log messages follow the `[TAG] message` convention, e.g.
`[CALLBACK] Token exchange failed: bad_verification_code`.
"""

import json
import logging
import re
import sys
from typing import Optional

SERVICE_NAME = "decap-oauth-relay"

_TAG_PATTERN = re.compile(r'\[([A-Z_]+)\]\s*(.*)', re.DOTALL)

REQUEST_FIELDS = ("method", "path", "status", "origin")


def request_fields(record: logging.LogRecord) -> Optional[dict]:
    """Request attributes attached to `record` via `extra=`, or None."""
    fields = {name: getattr(record, name) for name in REQUEST_FIELDS if hasattr(record, name)}
    return fields or None


def split_tag(message: str) -> tuple[Optional[str], str]:
    """Split `[TAG] rest` into (TAG, rest); (None, message) if untagged."""
    tag_match = _TAG_PATTERN.match(message)
    if tag_match:
        return tag_match.group(1), tag_match.group(2)
    return None, message


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log collectors in front of the relay.

    Request fields (`method`, `path`, `status`, `origin`) are copied into a
    `request` object when the call site passes them through `extra=`, so
    relay logs can be filtered by route and outcome.
    """

    def __init__(self, service_name: str = None):
        super().__init__()
        self.service_name = service_name or SERVICE_NAME

    def format(self, record: logging.LogRecord) -> str:
        tag, message = split_tag(record.getMessage())

        log_entry = {
            "service": self.service_name,
            "level": record.levelname,
            "tag": tag,
            "message": message,
            "module": record.module,
            "request": request_fields(record),
            "extra": {
                "function": record.funcName,
                "line": record.lineno,
            },
        }

        if record.exc_info:
            log_entry["extra"]["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class PlainFormatter(logging.Formatter):
    """Human-readable lines for running the relay locally."""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def setup_logging(
    level: str = "INFO",
    log_format: str = "plain",
    service_name: str = None,
) -> logging.Logger:
    """Configure root logging.

    Args:
        level: Log level name (DEBUG, INFO, ...).
        log_format: "plain" or "json".
        service_name: Service name embedded in JSON records.

    Returns:
        Configured root logger.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    if log_format == "json":
        stderr_handler.setFormatter(JSONFormatter(service_name))
    else:
        stderr_handler.setFormatter(PlainFormatter())
    root_logger.addHandler(stderr_handler)

    # Suppress noisy HTTP client logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root_logger
