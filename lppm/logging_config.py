# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
structlog setup for the LPPM API.

Every event goes through the same chain: request context from contextvars,
logger name and level, an ISO timestamp, secret redaction, then either a
JSON line (production) or the coloured console renderer (LOG_JSON=false).

Assumptions:
- The middleware in lppm.main binds request_id and path per request
- uvicorn's own access log is muted to WARNING; requests are logged once,
  by the middleware, with the request context attached
- Keys named like passwords or tokens never reach a renderer in clear
"""
import logging
import sys
from typing import Any, Iterable, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from lppm.config import settings

SENSITIVE_FIELDS = frozenset({"password", "user_pass", "token", "secret", "authorization"})
REDACTED = "[REDACTED]"

_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def redact(value: Any, fields: Iterable[str] = SENSITIVE_FIELDS) -> Any:
    """Return ``value`` with sensitive keys masked, at any nesting depth."""
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in fields else redact(item, fields)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item, fields) for item in value]
    return value


def redact_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """structlog processor masking sensitive keys in the whole event."""
    return redact(event_dict)


def _processors(json_output: bool) -> list[Processor]:
    renderer: Processor = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=False),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    log_level: Optional[str] = None,
    json_output: Optional[bool] = None
) -> None:
    """(Re)configure logging.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
            (default settings.log_level)
        json_output: JSON lines when True, console output when False
            (default settings.log_json)
    """
    level = getattr(logging, (log_level or settings.log_level).upper())
    if json_output is None:
        json_output = settings.log_json

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Start a fresh log context (request_id, path, ...) for this request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


configure_logging()
