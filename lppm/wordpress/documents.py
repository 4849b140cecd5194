# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Document (media library attachment) and download queries.

Assumptions:
- Documents are attachments (status "inherit") with an office/PDF/archive
  MIME type
- Downloads are WP Download Manager entries (post_type "wpdmpro") and posts
  or pages filed under a "wpdmcategory" term
- Page sizes are clamped: non-positive means the default, capped at MAX_LIMIT
"""
from typing import Any, Optional

from sqlalchemy.orm import Session

from lppm.database.schema import Post, Term, TermRelationship, TermTaxonomy
from lppm.wordpress.pagination import Page, paginate

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

DOWNLOAD_TAXONOMY = "wpdmcategory"
DOWNLOAD_POST_TYPES = ("wpdmpro", "post", "page")
DEFAULT_DOWNLOAD_CATEGORY = "download"

DOCUMENT_MIME_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "application/zip",
    "application/x-rar-compressed",
)


def clamp_limit(limit: Optional[int]) -> int:
    """Normalize a requested page size into 1..MAX_LIMIT."""
    if not limit or limit <= 0:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def list_documents(
    db: Session,
    limit: Optional[int] = DEFAULT_LIMIT,
    search: Optional[str] = None,
    page: int = 1,
) -> Page:
    """List downloadable documents from the media library, newest first.

    Args:
        db: Database session
        limit: Requested page size (clamped)
        search: Substring matched against the title
        page: 1-based page number

    Returns:
        Page: Post rows
    """
    query = db.query(Post).filter(
        Post.post_type == "attachment",
        Post.post_status == "inherit",
        Post.post_mime_type.in_(DOCUMENT_MIME_TYPES),
    )

    if search:
        query = query.filter(Post.post_title.like(f"%{search}%"))

    query = query.order_by(Post.post_date.desc())
    return paginate(query, page, clamp_limit(limit))


def list_downloads(
    db: Session,
    category: str = DEFAULT_DOWNLOAD_CATEGORY,
    limit: Optional[int] = DEFAULT_LIMIT,
) -> list[Any]:
    """List published downloads in one download category, newest first.

    Args:
        db: Database session
        category: wpdmcategory term slug
        limit: Requested number of rows (clamped)

    Returns:
        list: Rows with Post, category_slug and category_name
    """
    return (
        db.query(
            Post,
            Term.slug.label("category_slug"),
            Term.name.label("category_name"),
        )
        .join(TermRelationship, TermRelationship.object_id == Post.id)
        .join(TermTaxonomy, TermTaxonomy.term_taxonomy_id == TermRelationship.term_taxonomy_id)
        .join(Term, Term.term_id == TermTaxonomy.term_id)
        .filter(
            Post.post_status == "publish",
            Post.post_type.in_(DOWNLOAD_POST_TYPES),
            TermTaxonomy.taxonomy == DOWNLOAD_TAXONOMY,
            Term.slug == category,
        )
        .order_by(Post.post_date.desc())
        .limit(clamp_limit(limit))
        .all()
    )


def list_download_categories(db: Session) -> list[Any]:
    """List download categories, most populated first."""
    return (
        db.query(Term.slug, Term.name, TermTaxonomy.count)
        .select_from(TermTaxonomy)
        .join(Term, Term.term_id == TermTaxonomy.term_id)
        .filter(TermTaxonomy.taxonomy == DOWNLOAD_TAXONOMY)
        .order_by(TermTaxonomy.count.desc())
        .all()
    )
