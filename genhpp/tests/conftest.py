"""
Shared test setup: in-memory SQLite behind the FastAPI app.

PostgreSQL JSONB columns are swapped for JSON before table creation and
``get_db_session`` is overridden so every request uses the test engine.
"""

import pytest
import jwt
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from genhpp.db.models import Base, User
from genhpp.db.connection import get_db_session
from genhpp.api.main import app


TEST_JWT_SECRET = "test-secret-with-enough-length-for-hs256"


def _patch_jsonb_columns():
    """Replace JSONB columns with JSON for SQLite compatibility."""
    for table in Base.metadata.tables.values():
        for column in table.columns:
            if isinstance(column.type, JSONB):
                column.type = JSON()


# ---------------------------------------------------------------------------
# Test database setup
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db_session():
    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


app.dependency_overrides[get_db_session] = override_get_db_session


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def setup_db(monkeypatch):
    """Create tables and seed the default user before each test, drop after."""
    monkeypatch.delenv("SUPABASE_JWT_SECRET", raising=False)
    _patch_jsonb_columns()

    # SQLite ignores PostgreSQL-only clauses, so create_all works as is
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        db.add(User(id=1, name="Test User", email="test@genhpp.local", auth_id="user-1"))
        db.commit()
    finally:
        db.close()

    yield

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_auth(monkeypatch):
    """Switch to Supabase JWT mode. Returns a factory for auth headers."""
    monkeypatch.setenv("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)

    def make_headers(sub: str, email: str = None, name: str = None) -> dict:
        payload = {"sub": sub, "aud": "authenticated"}
        if email:
            payload["email"] = email
        if name:
            payload["user_metadata"] = {"full_name": name}
        token = jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}

    return make_headers


def make_admin(user_id: int = 1) -> None:
    db = TestingSessionLocal()
    try:
        db.query(User).filter_by(id=user_id).update({"is_admin": True})
        db.commit()
    finally:
        db.close()
