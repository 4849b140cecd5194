# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Unit tests for logging infrastructure.

Assumptions:
- structlog is configured on import of lppm.logging_config
- Passwords and tokens are redacted from every log event
"""
import pytest


@pytest.mark.unit
def test_get_logger_returns_bound_logger():
    from lppm.logging_config import get_logger

    logger = get_logger("test")
    logger.info("test_event", key="value")

    assert logger is not None


@pytest.mark.unit
def test_bind_and_clear_context():
    import structlog
    from lppm.logging_config import bind_context, clear_context

    bind_context(request_id="req-456", path="/api/posts")
    assert structlog.contextvars.get_contextvars() == {
        "request_id": "req-456",
        "path": "/api/posts",
    }

    clear_context()
    assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.unit
def test_configure_logging_console_mode():
    from lppm.logging_config import configure_logging, get_logger

    configure_logging(log_level="DEBUG", json_output=False)
    get_logger("test").debug("console_event")
    configure_logging()


@pytest.mark.unit
def test_redact_masks_nested_secrets():
    from lppm.logging_config import redact

    data = {
        "username": "admin",
        "Password": "rahasia",
        "meta": {"token": "a" * 64, "login_at": "now"},
        "items": [{"user_pass": "$P$..."}, "plain"],
    }

    assert redact(data) == {
        "username": "admin",
        "Password": "[REDACTED]",
        "meta": {"token": "[REDACTED]", "login_at": "now"},
        "items": [{"user_pass": "[REDACTED]"}, "plain"],
    }
    assert data["Password"] == "rahasia"


@pytest.mark.unit
def test_redact_secrets_processor():
    from lppm.logging_config import redact_secrets

    event = redact_secrets(None, "warning", {"event": "login_failed", "authorization": "Bearer x"})

    assert event == {"event": "login_failed", "authorization": "[REDACTED]"}


@pytest.mark.unit
def test_log_helpers_accept_context():
    from lppm.logging_utils import (
        log_application_error, log_application_event, log_audit_event, log_security_event
    )

    log_application_event("api_request", method="GET", status_code=200)
    log_application_error("database_error", ValueError("boom"), query="posts")
    log_audit_event("update", "content", "profile", changes={"password": "x"})
    log_security_event("login_failed", username="admin", ip_address="127.0.0.1")
