# tests/conftest.py
from __future__ import annotations

import os
import tempfile

# must be set before coursecart.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="coursecart-logs-"))

import pytest
from fastapi.testclient import TestClient

from coursecart.database import Base, SessionLocal, engine
from coursecart.main import app
from coursecart.schemas.section import SectionIn
from coursecart.services import registration
from coursecart.services.sessions import create_demo_session


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_section():
    def _make(class_number, code, schedule="TBA", name=None, status="Open"):
        return SectionIn(
            class_number=class_number,
            course_code=code,
            course_name=name or code,
            schedule=schedule,
            status=status,
        )
    return _make


@pytest.fixture
def stored_section(db, make_section):
    """SectionIn -> persisted Section row."""
    def _store(*args, **kwargs):
        return registration.upsert_section(db, make_section(*args, **kwargs))
    return _store


@pytest.fixture
def cart_session(db):
    return create_demo_session(db)


@pytest.fixture
def demo_token(client):
    r = client.post("/sessions/demo")
    assert r.status_code == 200
    return r.json()["access_token"]


@pytest.fixture
def auth_headers(demo_token):
    return {"Authorization": f"Bearer {demo_token}"}
