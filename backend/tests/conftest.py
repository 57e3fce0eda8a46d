"""Pytest fixtures for BriefDesk tests."""

import os

# Settings are read at import time; keep tests off Postgres.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from briefdesk.core.security import hash_password
from briefdesk.db.session import Base
from briefdesk.models.enums import UserRole
from briefdesk.models.user import User

# Ensure all models are loaded for create_all
import briefdesk.models  # noqa: F401


@pytest.fixture(scope="function")
def db():
    """Create an in-memory SQLite DB with all tables for tests."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_user(db):
    """Insert users directly, bypassing change tracking."""

    def _make(username: str, role: UserRole = UserRole.SALES) -> User:
        user = User(username=username, name=username.title(), password_hash=hash_password("secret123"), role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def actor(make_user):
    return make_user("admin", UserRole.ADMIN)


@pytest.fixture
def client(db, actor):
    from briefdesk.api.deps import require_auth
    from briefdesk.db.session import get_db
    from briefdesk.main import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[require_auth] = lambda: actor
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
