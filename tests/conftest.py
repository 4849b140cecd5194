# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Pytest configuration and shared fixtures.

Assumptions:
- Tests run with authentication ENABLED by default (production-like)
- The WordPress schema is created in an in-memory SQLite database per test
- Content documents are written to a per-test temporary directory
"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lppm.auth.token import issue_token
from lppm.config import settings
from lppm.database.schema import (
    Post, PostMeta, Term, TermRelationship, TermTaxonomy, UserMeta, WPUser, init_db
)

ADMIN_CAPABILITIES = 'a:1:{s:13:"administrator";b:1;}'
EDITOR_CAPABILITIES = 'a:1:{s:6:"editor";b:1;}'


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without HTTP")
    config.addinivalue_line("markers", "integration: tests through the HTTP API")
    config.addinivalue_line("markers", "hypothesis: property-based tests")


class WordPressFactory:
    """Inserts WordPress rows the way WordPress itself lays them out."""

    def __init__(self, session):
        self.session = session

    def post(self, title="Berita", content="<p>Isi berita</p>", post_type="post",
             status="publish", date=None, **fields):
        post = Post(
            post_title=title,
            post_content=content,
            post_type=post_type,
            post_status=status,
            post_date=date or datetime(2025, 11, 20, 9, 30),
            post_modified=fields.pop("modified", None) or date or datetime(2025, 11, 20, 9, 30),
            post_name=fields.pop("slug", title.lower().replace(" ", "-")),
            **fields
        )
        self.session.add(post)
        self.session.flush()
        return post

    def attachment(self, title="Lampiran", guid="https://lppm.unila.ac.id/wp-content/uploads/a.pdf",
                   mime="application/pdf", date=None, **fields):
        return self.post(
            title=title,
            content="",
            post_type="attachment",
            status="inherit",
            date=date,
            guid=guid,
            post_mime_type=mime,
            **fields
        )

    def thumbnail(self, post, guid):
        image = self.attachment(title=f"{post.post_title} image", guid=guid, mime="image/jpeg")
        self.session.add(PostMeta(post_id=post.id, meta_key="_thumbnail_id", meta_value=str(image.id)))
        self.session.flush()
        return image

    def term(self, name, slug, taxonomy="category", count=1):
        term = Term(name=name, slug=slug)
        self.session.add(term)
        self.session.flush()
        taxonomy_row = TermTaxonomy(term_id=term.term_id, taxonomy=taxonomy, count=count)
        self.session.add(taxonomy_row)
        self.session.flush()
        return taxonomy_row

    def assign(self, post, taxonomy_row):
        self.session.add(TermRelationship(
            object_id=post.id,
            term_taxonomy_id=taxonomy_row.term_taxonomy_id,
        ))
        self.session.flush()

    def user(self, login="admin", email="admin@unila.ac.id", user_pass="secret",
             display_name="Admin LPPM", capabilities=ADMIN_CAPABILITIES,
             meta_key="2022_capabilities"):
        user = WPUser(
            user_login=login,
            user_email=email,
            user_pass=user_pass,
            display_name=display_name,
        )
        self.session.add(user)
        self.session.flush()
        if capabilities is not None:
            self.session.add(UserMeta(user_id=user.id, meta_key=meta_key, meta_value=capabilities))
            self.session.flush()
        return user


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database with the WordPress tables.

    Assumptions:
    - StaticPool keeps one connection alive across threads
    - check_same_thread=False allows TestClient to use same connection
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(engine)

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def wp(db_session):
    """Factory for WordPress rows bound to the test session."""
    return WordPressFactory(db_session)


@pytest.fixture
def content_dir(tmp_path, monkeypatch):
    """Point the content store at a fresh temporary directory."""
    directory = tmp_path / "data"
    monkeypatch.setattr(settings, "content_dir", str(directory))
    return directory


@pytest.fixture
def client(db_session, content_dir):
    """Create test client sharing the same database session.

    Assumptions:
    - Overrides get_db dependency to use shared session
    - Content documents go to the content_dir fixture
    """
    from lppm.main import create_app
    from lppm.database.session import get_db

    app = create_app()

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def disable_auth(monkeypatch):
    """Disable the admin token gate for a test."""
    monkeypatch.setattr(settings, "auth_enabled", False)


@pytest.fixture
def admin_headers():
    """Authorization headers carrying a freshly minted admin token."""
    return {"Authorization": f"Bearer {issue_token(1)}"}
