"""Pytest configuration and fixtures for the studio workflow engine.

Every test gets a fresh in-memory SQLite database (single shared connection
through StaticPool). HTTP tests use FastAPI's TestClient with ``get_db``
overridden to point at that database.
"""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = "sqlite://"

from studio.db import Base, enable_sqlite_savepoints, get_db  # noqa: E402
from studio.main import app  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """ORM session for service-level tests."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """HTTP client against the FastAPI app, backed by the test database."""

    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_rule(client):
    """POST a workflow rule and return the stored JSON body."""

    def _create(**overrides):
        body = {
            "name": "Flag PNG uploads",
            "trigger": "on_upload",
            "conditions": {},
            "actions": [],
            "priority": 0,
        }
        body.update(overrides)
        response = client.post("/workflows", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
