# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
News post endpoints.

Assumptions:
- GET /api/posts - published news, newest first, 9 per page
  (?page=, ?keyword=, ?category=<slug>)
- GET /api/posts/categories - news categories with at least one post
- GET /api/posts/{post_id} - one published post with cleaned HTML
- Public, no authentication
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from lppm.config import settings
from lppm.database.session import get_db
from lppm.wordpress.formatting import (
    clean_content, fix_image_url, format_detail_date, format_list_date, make_excerpt
)
from lppm.wordpress.posts import get_news_post, list_news_categories, list_news_posts

DEFAULT_CATEGORY = "Umum"
DEFAULT_CATEGORY_SLUG = "umum"

router = APIRouter(prefix="/api/posts", tags=["posts"])


def _to_list_item(row) -> dict:
    return {
        "id": row.id,
        "title": row.post_title,
        "slug": row.slug,
        "date": format_list_date(row.post_date),
        "category": row.category_name or DEFAULT_CATEGORY,
        "category_slug": row.category_slug or DEFAULT_CATEGORY_SLUG,
        "thumbnail": fix_image_url(row.thumbnail_url),
        "excerpt": make_excerpt(row.post_content),
    }


@router.get("")
def list_posts(
    request: Request,
    db: Session = Depends(get_db),
    page: int = Query(1, description="Page number"),
    keyword: Optional[str] = Query(None, description="Search in title and content"),
    category: Optional[str] = Query(None, description="Category slug"),
):
    """List published news with pagination."""
    result = list_news_posts(
        db,
        page=page,
        per_page=settings.posts_per_page,
        keyword=keyword,
        category=category,
    )

    return {
        "status": "success",
        "data": [_to_list_item(row) for row in result.items],
        "pagination": result.as_dict(request.url),
    }


@router.get("/categories")
def list_categories(db: Session = Depends(get_db)):
    """List news categories, alphabetically."""
    categories = list_news_categories(db)
    return {
        "status": "success",
        "data": [
            {"term_id": c.term_id, "name": c.name, "slug": c.slug}
            for c in categories
        ],
    }


@router.get("/{post_id}")
def show_post(post_id: int, db: Session = Depends(get_db)):
    """Return one published post.

    Responses:
    - 404 {"message": "Berita tidak ditemukan"} when missing or unpublished
    """
    row = get_news_post(db, post_id)
    if row is None:
        return JSONResponse(status_code=404, content={"message": "Berita tidak ditemukan"})

    post = row.Post
    return {
        "status": "success",
        "data": {
            "id": post.id,
            "title": post.post_title,
            "slug": post.post_name,
            "date": format_detail_date(post.post_date),
            "category": row.category_name or DEFAULT_CATEGORY,
            "image": fix_image_url(row.thumbnail_url),
            "content": clean_content(post.post_content),
        },
    }
