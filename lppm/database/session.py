# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Engine and per-request sessions for the WordPress database.

Assumptions:
- Production is MySQL (mysql+mysqlconnector://...), which closes idle
  connections, so pooled connections are pinged and recycled hourly
- SQLite URLs are for local scratch databases served by several threads
"""
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from lppm.config import settings


def _connect_args(database_url: str) -> dict:
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
    pool_pre_ping=True,
    pool_recycle=3600,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a session closed after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
