#!/usr/bin/env python3
# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0
"""
Initialize a scratch WordPress database for local development.

This script creates the WordPress tables used by the API and seeds them with:
1. An administrator (admin / test12345, PHPass hash)
2. An editor that is refused at admin login (editor / test12345, MD5 hash)
3. A few news posts with categories and a thumbnail
4. Media library documents and WP Download Manager entries

Prerequisites:
- Use a fresh database; rows are inserted, not upserted
- WP_TABLE_PREFIX must match the prefix the server will run with

Usage:
    python scripts/init_test_db.py [--database-url DATABASE_URL]

Examples:
    python scripts/init_test_db.py                                      # Uses settings.database_url
    python scripts/init_test_db.py --database-url sqlite:///./wordpress.db
"""

import argparse
import hashlib
import sys
from datetime import datetime, timedelta

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lppm.config import settings
from lppm.database.schema import (
    Post, PostMeta, Term, TermRelationship, TermTaxonomy, UserMeta, WPUser, init_db
)

ADMIN_HASH = "$P$9IQRaTwmfeRo7ud9Fh4E2PdI0S3r.L0"
EDITOR_HASH = hashlib.md5(b"test12345").hexdigest()

NEWS = [
    ("Seminar Nasional Hasil Penelitian", "berita", True),
    ("Pembukaan Hibah Penelitian Dasar", "pengumuman", False),
    ("Pelatihan Penulisan Artikel Ilmiah", "berita", False),
    ("Pengabdian Masyarakat di Lampung Timur", None, True),
]

DOCUMENTS = [
    ("Panduan Penelitian 2025", "panduan-penelitian-2025.pdf", "application/pdf"),
    ("Template Proposal", "template-proposal.docx",
     "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    ("Rekap Pengabdian", "rekap-pengabdian.xlsx",
     "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
]

DOWNLOADS = [
    ("Formulir Usulan Penelitian", "formulir-usulan-penelitian"),
    ("Formulir Laporan Akhir", "formulir-laporan-akhir"),
]


def add_term(session: Session, name: str, slug: str, taxonomy: str, count: int) -> TermTaxonomy:
    term = Term(name=name, slug=slug)
    session.add(term)
    session.flush()
    row = TermTaxonomy(term_id=term.term_id, taxonomy=taxonomy, count=count)
    session.add(row)
    session.flush()
    return row


def add_user(session: Session, login: str, password_hash: str, role: str) -> WPUser:
    user = WPUser(
        user_login=login,
        user_email=f"{login}@lppm.test",
        user_pass=password_hash,
        display_name=login.title(),
    )
    session.add(user)
    session.flush()
    session.add(UserMeta(
        user_id=user.id,
        meta_key=f"{settings.wp_table_prefix}capabilities",
        meta_value=f'a:1:{{s:{len(role)}:"{role}";b:1;}}',
    ))
    return user


def seed(session: Session) -> None:
    """Insert the sample users, posts, documents and downloads."""
    site = settings.wp_site_url.rstrip("/")
    now = datetime.now().replace(microsecond=0)

    add_user(session, "admin", ADMIN_HASH, "administrator")
    add_user(session, "editor", EDITOR_HASH, "editor")
    print("✓ Users: admin (administrator), editor (editor)")

    categories = {
        "berita": add_term(session, "Berita", "berita", "category", 2),
        "pengumuman": add_term(session, "Pengumuman", "pengumuman", "category", 1),
    }
    for i, (title, category, with_image) in enumerate(NEWS):
        post = Post(
            post_title=title,
            post_name=title.lower().replace(" ", "-"),
            post_content=f"<p>{title}.</p><p>&nbsp;</p>",
            post_date=now - timedelta(days=i),
            post_modified=now - timedelta(days=i),
        )
        session.add(post)
        session.flush()
        if category:
            session.add(TermRelationship(
                object_id=post.id,
                term_taxonomy_id=categories[category].term_taxonomy_id,
            ))
        if with_image:
            image = Post(
                post_title=f"{title} image",
                post_type="attachment",
                post_status="inherit",
                post_mime_type="image/jpeg",
                guid=f"/wp-content/uploads/news-{post.id}.jpg",
            )
            session.add(image)
            session.flush()
            session.add(PostMeta(post_id=post.id, meta_key="_thumbnail_id", meta_value=str(image.id)))
    print(f"✓ News posts: {len(NEWS)}")

    for i, (title, filename, mime) in enumerate(DOCUMENTS):
        session.add(Post(
            post_title=title,
            post_type="attachment",
            post_status="inherit",
            post_mime_type=mime,
            post_date=now - timedelta(days=i),
            guid=f"{site}/wp-content/uploads/{filename}",
        ))
    print(f"✓ Documents: {len(DOCUMENTS)}")

    download = add_term(session, "Download", "download", "wpdmcategory", len(DOWNLOADS))
    for i, (title, slug) in enumerate(DOWNLOADS):
        post = Post(
            post_title=title,
            post_name=slug,
            post_type="wpdmpro",
            post_excerpt=f"<p>{title}</p>",
            post_date=now - timedelta(days=i),
            post_modified=now - timedelta(days=i),
        )
        session.add(post)
        session.flush()
        session.add(TermRelationship(object_id=post.id, term_taxonomy_id=download.term_taxonomy_id))
    print(f"✓ Downloads: {len(DOWNLOADS)}")


def init_test_database(database_url: str) -> None:
    """Create the WordPress tables and seed them.

    Args:
        database_url: SQLAlchemy URL of the scratch database
    """
    print("=" * 60)
    print("Initializing Test Database")
    print("=" * 60)
    print(f"Database: {database_url}")
    print(f"Table prefix: {settings.wp_table_prefix}")

    engine = create_engine(database_url)
    try:
        init_db(engine)
        with Session(engine) as session:
            seed(session)
            session.commit()
    except SQLAlchemyError as e:
        print(f"\n✗ Failed to initialize database: {e}")
        sys.exit(1)
    finally:
        engine.dispose()

    print("\nLog in with admin / test12345")


def main():
    parser = argparse.ArgumentParser(description="Initialize a scratch WordPress database")
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help=f"SQLAlchemy database URL (default: {settings.database_url})"
    )
    args = parser.parse_args()
    init_test_database(args.database_url)


if __name__ == "__main__":
    main()
