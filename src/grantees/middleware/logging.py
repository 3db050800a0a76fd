"""structlog setup, with email addresses and credentials scrubbed from every event."""

import hashlib
import logging
import re
from typing import Any

import structlog

from grantees.config import Settings

_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_BEARER_RE = re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._~+/=-]+")
_SECRET_KEYS = frozenset({"authorization", "password", "access_token", "token", "api_key", "resend_api_key"})

REDACTED = "[redacted]"


def email_fingerprint(email: str) -> str:
    """Stable, non-reversible stand-in for an email address in logs."""
    digest = hashlib.sha256(email.strip().lower().encode()).hexdigest()
    return f"email:{digest[:12]}"


def _scrub(value: str) -> str:
    value = _BEARER_RE.sub(f"Bearer {REDACTED}", value)
    return _EMAIL_RE.sub(lambda m: email_fingerprint(m.group(0)), value)


def redact_sensitive(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ANN401
    """Replace secrets by key, and emails or bearer tokens inside string values."""
    for key in list(event_dict):
        value = event_dict[key]
        if key.lower() in _SECRET_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, str):
            event_dict[key] = _scrub(value)
    return event_dict


def setup_logging(settings: Settings) -> None:
    """Configure structlog for JSON or console output."""
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if settings.log_format == "json" else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            # after format_exc_info so tracebacks are scrubbed too
            redact_sensitive,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
