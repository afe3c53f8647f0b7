"""
Pytest configuration for string analyzer tests.
"""

import os

# Keep test imports from pointing the module-level engine at a real database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from string_analyzer.api import dependencies
from string_analyzer.crud.strings import InMemoryStringStore, SqlStringStore
from string_analyzer.database import Base, get_db, init_db
from string_analyzer.main import app


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def sql_store(session_factory):
    db = session_factory()
    yield SqlStringStore(db)
    db.close()


@pytest.fixture
def memory_store():
    return InMemoryStringStore()


@pytest.fixture
def client(session_factory, monkeypatch):
    """API client whose requests each get their own session on the test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    monkeypatch.setattr(dependencies, "STRING_STORE", "sql")
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
