# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Admin login against the legacy WordPress user table.

Assumptions:
- POST /api/admin/login with username (login or email) and password
- Only WordPress administrators may log in
- The returned token is a random SHA-256 hex string, not stored
"""
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from lppm.auth.token import issue_token
from lppm.auth.user import authenticate_user, is_administrator
from lppm.database.session import get_db
from lppm.logging_utils import log_application_event, log_security_event


class AdminLogin(BaseModel):
    """Request model for admin login."""
    username: str = Field(min_length=1, description="user_login or user_email")
    password: str = Field(min_length=1)


router = APIRouter(prefix="/api/admin", tags=["authentication"])


@router.post("/login")
def login(
    credentials: AdminLogin,
    request: Request,
    db: Session = Depends(get_db)
):
    """Log in with WordPress credentials.

    Returns:
        dict: User profile and a bearer token for the admin endpoints

    Responses:
    - 401 when the user is unknown or the password does not match
    - 403 when the user is not an administrator
    """
    ip_address = request.client.host if request.client else None

    user = authenticate_user(db, credentials.username, credentials.password)
    if user is None:
        log_security_event(
            "login_failed",
            username=credentials.username,
            ip_address=ip_address,
            reason="invalid credentials",
        )
        return JSONResponse(
            status_code=401,
            content={
                "status": "error",
                "message": "Username atau password salah.",
            },
        )

    if not is_administrator(db, user.id):
        log_security_event(
            "login_forbidden",
            username=credentials.username,
            ip_address=ip_address,
            reason="not an administrator",
        )
        return JSONResponse(
            status_code=403,
            content={
                "status": "error",
                "message": "Akses ditolak. Akun ini bukan administrator.",
            },
        )

    log_application_event("admin_login", user_id=user.id, ip_address=ip_address)

    return {
        "status": "success",
        "data": {
            "id": user.id,
            "username": user.user_login,
            "display_name": user.display_name,
            "email": user.user_email,
        },
        "meta": {
            "token": issue_token(user.id),
            "login_at": datetime.now().astimezone().isoformat(timespec="seconds"),
        },
    }
