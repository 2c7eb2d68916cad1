"""Database engine setup.

For test runs (ENV=test) we intentionally fall back to an in-memory SQLite
database when DATABASE_URL is unset or explicitly requested via
NPS_STUB_TEST_SQLITE=1, so suites run without a database server.
"""

import os
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

raw_url = settings.DATABASE_URL

use_sqlite_memory = (
    settings.ENV.lower() == "test" and (os.getenv("NPS_STUB_TEST_SQLITE") == "1" or not raw_url)
)

if use_sqlite_memory:
    # Shared cache lets every connection see the same in-memory database
    raw_url = "sqlite:///file:test_db?mode=memory&cache=shared&uri=true"
    engine = create_engine(raw_url, future=True)
elif raw_url and raw_url.startswith("postgresql"):
    engine = create_engine(
        raw_url,
        future=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_pre_ping=True,  # Verify connection health before use
    )
else:
    raw_url = raw_url or "sqlite:///./storage/dev.db"
    if raw_url.startswith("sqlite:///./"):
        os.makedirs(os.path.dirname(raw_url.removeprefix("sqlite:///")) or ".", exist_ok=True)
    engine = create_engine(raw_url, future=True, connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
