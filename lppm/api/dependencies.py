# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Dependency injection utilities for FastAPI endpoints.

Assumptions:
- Admin endpoints expect "Authorization: Bearer <64 hex chars>"
- Tokens are only checked for shape, they are not looked up anywhere
  (see DESIGN.md, admin token open question)
- AUTH_ENABLED=false skips the check for local development
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lppm.api.envelope import ApiError
from lppm.auth.token import is_well_formed_token
from lppm.config import settings
from lppm.logging_utils import log_security_event

__all__ = [
    'bearer_scheme',
    'require_admin_token',
]

bearer_scheme = HTTPBearer(auto_error=False)


def require_admin_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Gate admin endpoints on a well-formed bearer token.

    Returns:
        str: The token (None when auth is disabled)

    Raises:
        ApiError: 401 "Unauthorized" without a token, 401 "Token tidak valid"
            for a malformed one
    """
    if not settings.auth_enabled:
        return None

    ip_address = request.client.host if request.client else None

    if credentials is None or not credentials.credentials:
        log_security_event(
            "admin_token_missing",
            ip_address=ip_address,
            path=request.url.path,
        )
        raise ApiError(401, "Unauthorized")

    token = credentials.credentials
    if not is_well_formed_token(token):
        log_security_event(
            "admin_token_rejected",
            ip_address=ip_address,
            reason="malformed token",
            path=request.url.path,
        )
        raise ApiError(401, "Token tidak valid")

    return token
