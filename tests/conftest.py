import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jobportal.models  # noqa: F401
from jobportal.core.security import TokenClaims
from jobportal.database import Base, get_db
from jobportal.dependencies import get_current_admin, get_current_claims
from jobportal.main import app

API = "/api/v1"


class StubDB:
    """Stands in for a Session in router tests where repos are monkeypatched."""

    def __init__(self):
        self.rolled_back = False

    def rollback(self):
        self.rolled_back = True


@pytest.fixture
def stub_db() -> StubDB:
    return StubDB()


@pytest.fixture
def student_claims() -> TokenClaims:
    return TokenClaims(user_id="11111111-1111-4111-8111-111111111111", email="student@example.com", role="student")


@pytest.fixture
def admin_claims() -> TokenClaims:
    return TokenClaims(user_id="22222222-2222-4222-8222-222222222222", email="admin@example.com", role="admin")


@pytest.fixture
def client(student_claims: TokenClaims, stub_db: StubDB):
    def _db_override():
        yield stub_db

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_claims] = lambda: student_claims
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(admin_claims: TokenClaims, stub_db: StubDB):
    def _db_override():
        yield stub_db

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_claims] = lambda: admin_claims
    app.dependency_overrides[get_current_admin] = lambda: admin_claims
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    """No auth overrides: the real bearer gate runs."""
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def api(session_factory):
    """Client backed by an in-memory SQLite database and real tokens."""
    def _db_override():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()
