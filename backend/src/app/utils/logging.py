"""Structured logging utilities for the migration Lambda.

Log lines are emitted as JSON on stdout so CloudWatch Logs Insights can
query them by request ID and trigger source.

SECURITY NOTES:
- Migration events carry the user's plaintext password; never log the
  request section of an event
- Use mask_email()/mask_pii() for user identifiers, or
  hash_for_correlation() when only a stable reference is needed
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Mapping
from typing import MutableMapping
from typing import Optional

# LogRecord attributes that are not caller-supplied extras.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime"}


def mask_email(email: str) -> str:
    """Mask an email address for safe logging.

    SECURITY: Migrated users' email addresses are PII and must not be
    logged in plain text. Enough is kept to tell log lines apart.

    Args:
        email: The email address to mask.

    Returns:
        A masked version like "jo***@***.com", or "***" when the value
        is not an email address.

    Examples:
        >>> mask_email("john.doe@example.com")
        'jo***@***.com'
        >>> mask_email("a@b.co")
        'a***@***.co'
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.rsplit("@", 1)
    domain_parts = domain.rsplit(".", 1)
    visible_local = local[:2] if len(local) > 2 else local[:1]
    tld = domain_parts[-1] if len(domain_parts) > 1 else ""

    return f"{visible_local}***@***.{tld}" if tld else f"{visible_local}***@***"


def mask_pii(value: str, visible_chars: int = 4) -> str:
    """Mask a PII value such as a username for safe logging.

    SECURITY: Use this for legacy usernames and any other identifier
    that could name a person.

    Args:
        value: The value to mask.
        visible_chars: Number of characters to show at the start.

    Returns:
        The first ``visible_chars`` characters followed by "***", only
        the first character when the value is that short, or "***" for
        an empty value.
    """
    if not value:
        return "***"
    if len(value) <= visible_chars:
        return value[0] + "***"
    return value[:visible_chars] + "***"


def hash_for_correlation(value: str) -> str:
    """Generate a short hash for log correlation without exposing PII.

    SECURITY: Use this to follow one legacy user across the
    authenticate and lookup calls without logging the username.

    Args:
        value: The value to hash (e.g., a username).

    Returns:
        The first 12 hex characters of the value's SHA-256 digest.
    """
    return hashlib.sha256(value.encode()).hexdigest()[:12]


request_id: ContextVar[str] = ContextVar("request_id", default="")


class StructuredLogFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            },
        }

        req_id = request_id.get()
        if req_id:
            log_data["request_id"] = req_id

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS
        }
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that merges adapter-level context into ``extra``."""

    def process(
        self,
        msg: str,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        if self.extra:
            extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(level: Optional[str] = None) -> None:
    """Install the JSON handler on the root logger.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL environment
            variable, then INFO.
    """
    log_level: str = level or os.getenv("LOG_LEVEL") or "INFO"

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredLogFormatter())
    root_logger.addHandler(handler)

    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> ContextLogger:
    """Return a ContextLogger that adds ``extra`` to every record."""
    return ContextLogger(logging.getLogger(name), extra)


def set_request_context(req_id: Optional[str] = None) -> None:
    """Tag subsequent log lines with the Lambda request ID."""
    if req_id:
        request_id.set(req_id)


def clear_request_context() -> None:
    request_id.set("")


def log_trigger_event(
    logger: ContextLogger,
    event: Mapping[str, Any],
) -> None:
    """Log a Cognito trigger event summary at DEBUG level.

    Only the trigger source, pool and a masked username are logged.
    """
    log_data = {
        "trigger_source": event.get("triggerSource"),
        "user_pool_id": event.get("userPoolId"),
        "user": mask_pii(str(event.get("userName") or "")),
    }
    logger.debug("Trigger event received", extra={"event": log_data})


def log_trigger_outcome(
    logger: ContextLogger,
    trigger_source: Optional[str],
    reason: Optional[str] = None,
    duration_ms: Optional[float] = None,
) -> None:
    """Log the terminal outcome of a trigger invocation.

    Successes are logged at INFO, failures at WARNING with their reason
    code.
    """
    log_data: dict[str, Any] = {
        "trigger_source": trigger_source,
        "outcome": "failed" if reason else "succeeded",
    }
    if reason:
        log_data["reason"] = reason
    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    level = logging.WARNING if reason else logging.INFO
    logger.log(level, "Trigger outcome", extra={"outcome": log_data})
