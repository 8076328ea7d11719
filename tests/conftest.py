"""
Pytest configuration and fixtures for the Since On Earth backend tests.

The environment has to be in place before ``sinceonearth`` is imported:
settings and the SQLAlchemy engine are built at import time.
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone

_DB_DIR = tempfile.mkdtemp(prefix="sinceonearth-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_FILE"] = ""

import pytest
from fastapi.testclient import TestClient

from sinceonearth.core.auth import create_access_token, hash_password
from sinceonearth.core.db import Base, SessionLocal, engine
from sinceonearth.main import app
from sinceonearth.models.user import User
from sinceonearth.services.presence_registry import PresenceRegistry, get_presence_registry
from sinceonearth.services.users import _next_alien


class FakeClock:
    """Manually advanced clock for the presence registry."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return PresenceRegistry(clock=clock)


@pytest.fixture
def client(registry):
    app.dependency_overrides[get_presence_registry] = lambda: registry
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Insert a user straight into the table and return it."""

    def _make(username, *, email=None, password="secret123", is_admin=False,
              approved=True, profile_icon=None, alien=None):
        user = User(
            alien=alien or _next_alien(db),
            username=username,
            email=email or f"{username}@example.com",
            password_hash=hash_password(password),
            name=username.title(),
            country="Other",
            is_admin=is_admin,
            approved=approved,
            profile_icon=profile_icon,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def headers_for():
    return auth_headers
