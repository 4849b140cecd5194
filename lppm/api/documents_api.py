# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Document library and POS-AP download endpoints.

Assumptions:
- GET /api/documents - office/PDF/archive attachments (?limit=, ?search=, ?page=)
- GET /api/pos-ap/downloads - WP Download Manager entries (?category=, ?limit=)
- GET /api/pos-ap/categories - download categories by popularity
- Public, no authentication
- Database failures return a 500 meta envelope with the driver message
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lppm.api.envelope import ApiError, success
from lppm.config import settings
from lppm.database.session import get_db
from lppm.logging_utils import log_application_error
from lppm.wordpress.documents import (
    DEFAULT_DOWNLOAD_CATEGORY, DEFAULT_LIMIT,
    list_documents, list_download_categories, list_downloads
)
from lppm.wordpress.formatting import absolute_url, document_type, strip_tags

documents_router = APIRouter(prefix="/api/documents", tags=["documents"])
pos_ap_router = APIRouter(prefix="/api/pos-ap", tags=["pos-ap"])


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else None


@documents_router.get("")
def index_documents(
    request: Request,
    db: Session = Depends(get_db),
    limit: int = Query(DEFAULT_LIMIT, description="Page size, at most 100"),
    search: Optional[str] = Query(None, description="Search in title"),
    page: int = Query(1, description="Page number"),
):
    """List downloadable documents from the media library."""
    site_url = settings.wp_site_url.rstrip("/")

    try:
        result = list_documents(db, limit=limit, search=search, page=page)
    except SQLAlchemyError as e:
        log_application_error("documents_query_failed", e)
        raise ApiError(500, f"Gagal mengambil dokumen: {e}")

    items = [
        {
            "id": post.id,
            "title": post.post_title,
            "date": _format_timestamp(post.post_date),
            "url": absolute_url(post.guid, site_url),
            "type": document_type(post.post_mime_type),
            "mime": post.post_mime_type,
            "excerpt": post.post_excerpt,
        }
        for post in result.items
    ]

    return success(
        "Daftar dokumen berhasil diambil",
        items,
        count=len(items),
        pagination=result.as_dict(request.url),
    )


@pos_ap_router.get("/downloads")
def index_downloads(
    db: Session = Depends(get_db),
    category: str = Query(DEFAULT_DOWNLOAD_CATEGORY, description="wpdmcategory slug"),
    limit: int = Query(DEFAULT_LIMIT, description="Number of items, at most 100"),
):
    """List downloads of one category, newest first.

    Assumptions:
    - With a configured site URL, links go through WP Download Manager
      (?wpdmdl=<id>) and the permalink is <site>/<post_name>
    - Without one, both fall back to the post guid
    """
    site_url = settings.wp_site_url.rstrip("/")

    try:
        rows = list_downloads(db, category=category, limit=limit)
    except SQLAlchemyError as e:
        log_application_error("downloads_query_failed", e, category=category)
        raise ApiError(500, f"Gagal mengambil data POS-AP: {e}")

    items = []
    for row in rows:
        post = row.Post
        items.append({
            "id": int(post.id),
            "title": post.post_title,
            "excerpt": strip_tags(post.post_excerpt or ""),
            "slug": post.post_name,
            "category": {
                "slug": row.category_slug,
                "name": row.category_name,
            },
            "updated_at": _format_timestamp(post.post_modified or post.post_date),
            "download_url": f"{site_url}/?wpdmdl={post.id}" if site_url else post.guid,
            "permalink": f"{site_url}/{post.post_name}" if site_url else post.guid,
        })

    return success("Data POS-AP berhasil diambil", items, count=len(items))


@pos_ap_router.get("/categories")
def index_download_categories(db: Session = Depends(get_db)):
    """List download categories with their item counts."""
    try:
        rows = list_download_categories(db)
    except SQLAlchemyError as e:
        log_application_error("download_categories_query_failed", e)
        raise ApiError(500, f"Gagal mengambil kategori POS-AP: {e}")

    categories = [
        {"slug": row.slug, "name": row.name, "count": int(row.count)}
        for row in rows
    ]
    return success(
        "Daftar kategori POS-AP berhasil diambil",
        categories,
        count=len(categories),
    )
