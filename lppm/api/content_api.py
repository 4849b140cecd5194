# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Admin endpoints for the JSON content documents.

Assumptions:
- GET/PUT /api/admin/content/{filename} for profile, statistics, sub-bagian
- Requires a well-formed admin bearer token
- PUT is a partial update merged into the stored document
"""
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lppm.api.dependencies import require_admin_token
from lppm.api.envelope import ApiError, success
from lppm.content import (
    ContentFormatError, ContentNotFoundError, ContentStoreError,
    get_content_path, read_content, write_content
)
from lppm.logging_utils import log_application_error


class ContentMetadata(BaseModel):
    """Known metadata fields; anything else is kept as-is."""
    model_config = ConfigDict(extra="allow")

    last_updated: Optional[str] = None
    data_source: Optional[str] = None
    description: Optional[str] = None


class ContentUpdate(BaseModel):
    """Loose schema of a content update; only metadata is typed."""
    model_config = ConfigDict(extra="allow")

    metadata: ContentMetadata = Field(default=None)


router = APIRouter(
    prefix="/api/admin/content",
    tags=["content"],
    dependencies=[Depends(require_admin_token)],
)


def _validation_errors(exc: ValidationError) -> dict:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        errors.setdefault(field, []).append(error["msg"])
    return errors


def _require_known(filename: str) -> None:
    if get_content_path(filename) is None:
        raise ApiError(404, "File tidak ditemukan")


@router.get("/{filename}")
def show_content(filename: str):
    """Return a content document (defaults when it was never saved)."""
    _require_known(filename)

    try:
        data = read_content(filename)
    except ContentNotFoundError:
        raise ApiError(404, "File tidak ditemukan")
    except ContentFormatError as e:
        log_application_error("content_read_failed", e, name=filename)
        raise ApiError(500, "File JSON tidak valid")
    except ContentStoreError as e:
        log_application_error("content_read_failed", e, name=filename)
        raise ApiError(500, f"Gagal membaca file: {e}")

    return success("Data berhasil diambil", data)


@router.put("/{filename}")
def update_content(
    filename: str,
    payload: Optional[dict[str, Any]] = Body(None),
):
    """Merge a partial document into the stored one.

    Responses:
    - 400 when metadata is not an object or its known fields are not strings
    - 404 for unknown documents
    - 500 when the file cannot be written
    """
    _require_known(filename)
    payload = payload or {}

    try:
        ContentUpdate.model_validate(payload)
    except ValidationError as e:
        raise ApiError(400, "Data tidak valid", errors=_validation_errors(e))

    try:
        path = write_content(filename, payload)
    except ContentNotFoundError:
        raise ApiError(404, "File tidak ditemukan")
    except ContentStoreError as e:
        log_application_error("content_write_failed", e, name=filename)
        raise ApiError(500, f"Gagal menyimpan file: {e}")

    return success("Data berhasil diupdate", {
        "filename": path.name,
        "updated_at": datetime.now().astimezone().isoformat(timespec="seconds"),
    })
