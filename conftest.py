"""Shared pytest fixtures: in-memory SQLite, services, users and a test client."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import blog_backend.models  # noqa: F401  registers all tables
from blog_backend.core.security import create_user_token
from blog_backend.database import Base, get_db
from blog_backend.main import create_app
from blog_backend.models.user import UserRole
from blog_backend.schemas.user import UserCreate
from blog_backend.services import build_services


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def services():
    return build_services()


@pytest.fixture
def client(session_factory, services):
    app = create_app(services)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db, services):
    """Create users directly through the gateway (bypasses registration rules)."""
    counter = {"n": 0}

    def _make(name="Writer", email=None, role=UserRole.USER, password="secret123"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        user_in = UserCreate(name=name, email=email, password=password, role=role)
        return services.users.users.create_user(db, user_in=user_in)

    return _make


@pytest.fixture
def author(make_user):
    return make_user(name="Alice Author", email="alice@example.com")


@pytest.fixture
def other_user(make_user):
    return make_user(name="Bob Other", email="bob@example.com")


@pytest.fixture
def admin(make_user):
    return make_user(name="Ada Admin", email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _headers
