from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("NPS_STUB_TEST_SQLITE", "1")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.db import session as db_session
from app.db.base_class import Base
from app.db.session import SessionLocal
from app.models import report_models  # noqa: F401
from app.models.schemas import MonthlyReport
from tests.factories import make_report

TEST_DATABASE_URL = "sqlite:///:memory:"


test_engine = create_engine(
    TEST_DATABASE_URL,
    future=True,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Ensure application code uses the test engine
settings.DATABASE_URL = TEST_DATABASE_URL  # type: ignore[attr-defined]
settings.ENV = "test"  # type: ignore[attr-defined]
db_session.engine = test_engine  # type: ignore[assignment]
SessionLocal.configure(bind=test_engine)


@pytest.fixture(autouse=True)
def _reset_database_state():
    """Ensure each test sees a fresh database schema."""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield


@pytest.fixture(autouse=True)
def _isolated_audit_log(tmp_path, monkeypatch):
    path = tmp_path / "audit.log"
    monkeypatch.setattr(settings, "AUDIT_LOG_FILE", str(path))
    yield path


@pytest.fixture
def audit_log(_isolated_audit_log):
    return _isolated_audit_log


@pytest.fixture
def client() -> TestClient:
    from app.api.main import app

    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_report() -> MonthlyReport:
    return make_report(3)
