# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
News post queries against the WordPress tables.

Assumptions:
- News are published rows of post_type "post"
- The featured image is postmeta "_thumbnail_id" -> attachment guid
- A post shows one category (taxonomy "category"); posts with several are
  grouped so they are listed once
"""
from typing import Any, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Query, Session, aliased

from lppm.database.schema import Post, PostMeta, Term, TermRelationship, TermTaxonomy
from lppm.wordpress.pagination import Page, paginate

THUMBNAIL_META_KEY = "_thumbnail_id"
CATEGORY_TAXONOMY = "category"


def _with_image_and_category(query: Query, image: Any) -> Query:
    return (
        query
        .outerjoin(
            PostMeta,
            and_(Post.id == PostMeta.post_id, PostMeta.meta_key == THUMBNAIL_META_KEY),
        )
        .outerjoin(image, PostMeta.meta_value == image.id)
        .outerjoin(TermRelationship, Post.id == TermRelationship.object_id)
        .outerjoin(
            TermTaxonomy,
            and_(
                TermRelationship.term_taxonomy_id == TermTaxonomy.term_taxonomy_id,
                TermTaxonomy.taxonomy == CATEGORY_TAXONOMY,
            ),
        )
        .outerjoin(Term, TermTaxonomy.term_id == Term.term_id)
    )


def list_news_posts(
    db: Session,
    page: int = 1,
    per_page: int = 9,
    keyword: Optional[str] = None,
    category: Optional[str] = None,
) -> Page:
    """List published news, newest first.

    Args:
        db: Database session
        page: 1-based page number
        per_page: Page size
        keyword: Substring matched against title or content
        category: Category slug

    Returns:
        Page: Rows with id, post_title, post_date, slug, post_content,
        thumbnail_url, category_name, category_slug
    """
    image = aliased(Post)
    query = _with_image_and_category(
        db.query(
            Post.id,
            Post.post_title,
            Post.post_date,
            Post.post_name.label("slug"),
            Post.post_content,
            image.guid.label("thumbnail_url"),
            Term.name.label("category_name"),
            Term.slug.label("category_slug"),
        ),
        image,
    ).filter(Post.post_status == "publish", Post.post_type == "post")

    if keyword:
        pattern = f"%{keyword}%"
        query = query.filter(Post.post_title.like(pattern) | Post.post_content.like(pattern))

    if category:
        query = query.filter(Term.slug == category)

    query = query.group_by(Post.id).order_by(Post.post_date.desc())
    return paginate(query, page, per_page)


def get_news_post(db: Session, post_id: int) -> Optional[Any]:
    """Get one published post with its featured image and category.

    Returns:
        Row with ``Post``, thumbnail_url and category_name, or None
    """
    image = aliased(Post)
    return (
        _with_image_and_category(
            db.query(
                Post,
                image.guid.label("thumbnail_url"),
                Term.name.label("category_name"),
            ),
            image,
        )
        .filter(Post.id == post_id, Post.post_status == "publish")
        .first()
    )


def list_news_categories(db: Session) -> list[Any]:
    """List news categories that have at least one post, by name."""
    return (
        db.query(Term.term_id, Term.name, Term.slug)
        .join(TermTaxonomy, Term.term_id == TermTaxonomy.term_id)
        .filter(TermTaxonomy.taxonomy == CATEGORY_TAXONOMY, TermTaxonomy.count > 0)
        .order_by(Term.name.asc())
        .all()
    )
