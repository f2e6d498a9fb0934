"""
structlog setup for the alumni API.

Events are snake_case names with keyword context (`logger.info("user_activated",
user_id=...)`). Credentials never reach the output: password hashes, JWTs,
activation links and OTP codes are replaced, and e-mail addresses keep only
their first letter and domain.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping

import structlog

REDACTED = "REDACTED"

# Substrings of context keys whose values are credentials.
CREDENTIAL_MARKERS = ("password", "secret", "token", "authorization", "code", "activation_link")
EMAIL_KEYS = frozenset({"email", "to", "to_email"})


def _mask_email(value: Any) -> Any:
    if not isinstance(value, str) or "@" not in value:
        return value
    local, _, domain = value.partition("@")
    return f"{local[:1]}***@{domain}"


def redact_sensitive(logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    for key in list(event_dict):
        if key == "event":
            continue
        lowered = key.lower()
        if any(marker in lowered for marker in CREDENTIAL_MARKERS):
            event_dict[key] = REDACTED
        elif lowered in EMAIL_KEYS:
            event_dict[key] = _mask_email(event_dict[key])
    return event_dict


def configure_logging(log_level: str = "INFO", *, app_env: str = "prod") -> None:
    """JSON lines on stdout; the dev environment gets the console renderer instead."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    renderer = structlog.dev.ConsoleRenderer() if app_env == "dev" else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            redact_sensitive,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
