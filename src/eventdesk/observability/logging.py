"""
eventdesk.observability.logging

JSON logging for the event-desk service.

Responsibilities:
- Install a single named stdout handler (safe to call once per app instance).
- Route stdlib and structlog records through the same JSON pipeline.
- Scrub credentials (passwords, auth tokens, hashes) from every event.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

HANDLER_NAME = "eventdesk"
REDACTED_VALUE = "[REDACTED]"

_SECRET_KEYS = frozenset(
    {"password", "password_hash", "auth_token", "authtoken", "token", "jwt_secret"}
)
_NOISY_LOGGERS = ("aiosqlite", "passlib", "sqlalchemy.engine", "multipart")


def redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in event_dict:
        if key.lower() in _SECRET_KEYS:
            event_dict[key] = REDACTED_VALUE
    return event_dict


def _service_tag(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def _processors(service_name: str) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_tag(service_name),
        redact_secrets,
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]


def _install_handler(level: int) -> None:
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def configure_logging(*, service_name: str, level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    _install_handler(numeric)

    structlog.configure(
        processors=_processors(service_name),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request metadata (request id, procedure, client) is bound through
# contextvars in `observability.middleware`; handlers only add domain fields.
