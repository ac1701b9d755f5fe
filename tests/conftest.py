"""Shared fixtures: a throwaway sqlite database and an application client."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "complaint_desk_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "Asia/Bangkok"

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from app.domain.entities import ROLE_ADMIN, ROLE_VIEWER, Complaint  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.repositories import ComplaintRepository  # noqa: E402
from app.application.use_cases.users import create_user  # noqa: E402
from app.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture()
def reset_database():
    """Start every database test from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(reset_database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db_session):
    def _make_user(username: str = "staff", *, role: str = ROLE_VIEWER, password: str = "Secret123", is_active: bool = True):
        return create_user(
            db_session,
            username=username,
            password=password,
            role_alias=role,
            is_active=is_active,
        )

    return _make_user


@pytest.fixture()
def admin_user(make_user):
    return make_user("admin", role=ROLE_ADMIN)


@pytest.fixture()
def make_complaint(db_session):
    counter = {"value": 0}

    def _make_complaint(
        subject: str = "Broken air conditioner",
        *,
        status: str = "new",
        priority: str = "medium",
        category: str = "equipment",
    ) -> Complaint:
        counter["value"] += 1
        return ComplaintRepository(db_session).create(
            Complaint(
                id=None,
                tracking_number=f"CMP-20240101-{1000 + counter['value']}",
                category=category,
                priority=priority,
                subject=subject,
                description="The unit on the third floor stopped working.",
                status=status,
            )
        )

    return _make_complaint


@pytest.fixture()
def auth_headers():
    """Build bearer headers for a username without going through the login form."""

    def _auth_headers(username: str, role: str = ROLE_VIEWER) -> dict[str, str]:
        token = create_access_token({"sub": username, "role": role})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def client(reset_database):
    """Return a test client bound to a clean application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
