"""
Central pytest configuration for the barbershop scheduling tests.

Provides database, Flask app and client fixtures shared by unit and
integration tests.
"""

import os

# Test database configuration (set early so the lazy engine uses it)
TEST_DATABASE_URL = "sqlite:///:memory:"  # In-memory SQLite for fast tests
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["LOG_TO_FILE"] = "false"

import pytest  # noqa: E402

from barbershop.db.seed import seed_default_catalog  # noqa: E402
from barbershop.db.session import (  # noqa: E402
    SessionLocal,
    create_tables,
    drop_tables,
)
from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
)


@pytest.fixture
def db_session():
    """Fresh schema per test; yields an open session."""
    drop_tables()
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_tables()


@pytest.fixture
def seeded_catalog(db_session):
    """Default services (ids 1-4) and one professional (id 1)."""
    seed_default_catalog(db_session)
    return db_session


@pytest.fixture
def app(db_session):
    """Flask app bound to the in-memory test database."""
    from barbershop.main import create_app

    flask_app = create_app({"TESTING": True, "SEED_DEFAULT_CATALOG": False})
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()
