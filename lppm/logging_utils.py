# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Named event loggers for the LPPM API.

- lppm.application: requests and failures of the database or content files
- lppm.audit: every change to a content document
- lppm.security: failed logins and rejected admin tokens

Assumptions:
- Secrets are masked by the redact_secrets processor; payloads are also
  redacted here so nested "changes" never carry a password
"""
from typing import Any, Optional

from lppm.logging_config import get_logger, redact

app_logger = get_logger("lppm.application")
audit_logger = get_logger("lppm.audit")
security_logger = get_logger("lppm.security")


def log_application_event(event: str, **kwargs: Any) -> None:
    app_logger.info(event, **redact(kwargs))


def log_application_error(
    event: str,
    error: Optional[BaseException] = None,
    **kwargs: Any
) -> None:
    """Log a failed database query or file operation.

    Args:
        event: Event name, e.g. "documents_query_failed"
        error: The exception that was caught
        **kwargs: Context such as the document name or category
    """
    if error is not None:
        kwargs["error"] = str(error)
        kwargs["error_type"] = type(error).__name__
    app_logger.error(event, **redact(kwargs))


def log_audit_event(
    operation: str,
    entity_type: str,
    entity_id: str,
    changes: Optional[dict[str, Any]] = None,
    **kwargs: Any
) -> None:
    """Record who-changed-what for a content document.

    Args:
        operation: "update"
        entity_type: "content"
        entity_id: Document name (profile, statistics, sub-bagian)
        changes: The partial document that was merged in
        **kwargs: File and backup names
    """
    audit_logger.info(
        "audit_event",
        operation=operation,
        entity_type=entity_type,
        entity_id=entity_id,
        changes=redact(changes) if changes else None,
        **kwargs
    )


def log_security_event(
    event: str,
    username: Optional[str] = None,
    ip_address: Optional[str] = None,
    reason: Optional[str] = None,
    **kwargs: Any
) -> None:
    """Log an authentication failure.

    Args:
        event: login_failed, login_forbidden, admin_token_missing, ...
        username: Submitted login name, if any
        ip_address: Client address
        reason: Short human-readable cause
    """
    security_logger.warning(
        event,
        username=username,
        ip_address=ip_address,
        reason=reason,
        **redact(kwargs)
    )
