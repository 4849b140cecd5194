# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Response envelopes shared by the admin, document and POS-AP endpoints.

Responses look like::

    {"meta": {"code": 200, "status": "success", "message": "..."}, "data": ...}

Assumptions:
- Errors carry only "meta" (plus "errors" for validation failures)
- ApiError is rendered by the handler registered in create_app
"""
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """Error rendered as a meta envelope with the given HTTP status."""

    def __init__(self, code: int, message: str, errors: Optional[dict] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.errors = errors


def success(message: str, data: Any = None, **meta: Any) -> dict:
    """Build a 200 meta envelope.

    Args:
        message: Human-readable message
        data: Response payload
        **meta: Extra meta fields (count, pagination, ...)
    """
    return {
        "meta": {
            "code": 200,
            "status": "success",
            "message": message,
            **meta,
        },
        "data": data,
    }


def error_body(code: int, message: str, errors: Optional[dict] = None) -> dict:
    """Build the body of an error meta envelope."""
    meta = {
        "code": code,
        "status": "error",
        "message": message,
    }
    if errors is not None:
        meta["errors"] = errors
    return {"meta": meta}


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render ApiError raised anywhere in a route or dependency."""
    return JSONResponse(
        status_code=exc.code,
        content=error_body(exc.code, exc.message, exc.errors),
    )
