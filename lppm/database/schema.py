# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
SQLAlchemy mapping of the WordPress tables this API reads.

Assumptions:
- The schema is owned by WordPress; only the columns we read are mapped
- Table names carry the configured prefix (WP_TABLE_PREFIX, e.g. "2022_")
- Nothing here is written by the API; init_db exists for tests and local
  scratch databases only
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from lppm.config import settings

PREFIX = settings.wp_table_prefix

# BIGINT UNSIGNED in MySQL; SQLite only autoincrements INTEGER keys
WPID = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """Base class for all WordPress models."""
    pass


class Post(Base):
    """Row of wp_posts: news posts, pages, attachments and downloads.

    Assumptions:
    - post_type distinguishes post / page / attachment / wpdmpro
    - Attachments keep their file URL in guid and status "inherit"
    """
    __tablename__ = f"{PREFIX}posts"

    id: Mapped[int] = mapped_column("ID", WPID, primary_key=True, autoincrement=True)
    post_author: Mapped[int] = mapped_column(WPID, default=0, nullable=False)
    post_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    post_content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    post_title: Mapped[str] = mapped_column(Text, default="", nullable=False)
    post_excerpt: Mapped[str] = mapped_column(Text, default="", nullable=False)
    post_status: Mapped[str] = mapped_column(String(20), default="publish", nullable=False, index=True)
    post_name: Mapped[str] = mapped_column(String(200), default="", nullable=False, index=True)
    post_modified: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    guid: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    post_type: Mapped[str] = mapped_column(String(20), default="post", nullable=False, index=True)
    post_mime_type: Mapped[str] = mapped_column(String(100), default="", nullable=False)


class PostMeta(Base):
    """Row of wp_postmeta (e.g. _thumbnail_id -> attachment ID)."""
    __tablename__ = f"{PREFIX}postmeta"

    meta_id: Mapped[int] = mapped_column(WPID, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(WPID, default=0, nullable=False, index=True)
    meta_key: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    meta_value: Mapped[Optional[str]] = mapped_column(Text)


class Term(Base):
    """Row of wp_terms."""
    __tablename__ = f"{PREFIX}terms"

    term_id: Mapped[int] = mapped_column(WPID, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    slug: Mapped[str] = mapped_column(String(200), default="", nullable=False, index=True)


class TermTaxonomy(Base):
    """Row of wp_term_taxonomy (category, wpdmcategory, post_tag, ...)."""
    __tablename__ = f"{PREFIX}term_taxonomy"

    term_taxonomy_id: Mapped[int] = mapped_column(WPID, primary_key=True, autoincrement=True)
    term_id: Mapped[int] = mapped_column(WPID, default=0, nullable=False)
    taxonomy: Mapped[str] = mapped_column(String(32), default="", nullable=False, index=True)
    count: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)


class TermRelationship(Base):
    """Row of wp_term_relationships linking posts to taxonomy terms."""
    __tablename__ = f"{PREFIX}term_relationships"

    object_id: Mapped[int] = mapped_column(WPID, primary_key=True, default=0)
    term_taxonomy_id: Mapped[int] = mapped_column(WPID, primary_key=True, default=0)


class WPUser(Base):
    """Row of wp_users.

    Assumptions:
    - user_pass holds any of the legacy hash formats (see auth.password)
    """
    __tablename__ = f"{PREFIX}users"

    id: Mapped[int] = mapped_column("ID", WPID, primary_key=True, autoincrement=True)
    user_login: Mapped[str] = mapped_column(String(60), default="", nullable=False, index=True)
    user_pass: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    user_email: Mapped[str] = mapped_column(String(100), default="", nullable=False, index=True)
    display_name: Mapped[str] = mapped_column(String(250), default="", nullable=False)


class UserMeta(Base):
    """Row of wp_usermeta (capabilities are PHP-serialized arrays)."""
    __tablename__ = f"{PREFIX}usermeta"

    umeta_id: Mapped[int] = mapped_column(WPID, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(WPID, default=0, nullable=False, index=True)
    meta_key: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    meta_value: Mapped[Optional[str]] = mapped_column(Text)


def init_db(engine) -> None:
    """Create the WordPress tables on a scratch database.

    Args:
        engine: SQLAlchemy engine

    Assumptions:
    - Only for tests and local development, never the live WordPress DB
    - create_all skips tables that already exist
    """
    Base.metadata.create_all(bind=engine)
