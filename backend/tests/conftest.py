"""
Central pytest configuration for the clinic billing backend tests.

Provides the test environment (in-memory SQLite, no log files), the pytest
markers used across the suite, and shared fixtures for database sessions,
the Flask application and its test client.
"""

import os
import sys
from pathlib import Path

import pytest

# Add backend/ to sys.path so `clinic` and `tests` import without installation
backend_root = Path(__file__).parent.parent
sys.path.insert(0, str(backend_root))

# Test database configuration (set early so the lazy engine uses it)
TEST_DATABASE_URL = "sqlite:///:memory:"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["LOG_TO_FILE"] = "0"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from clinic.db.session import SessionLocal, create_tables, drop_tables  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "api: mark test as API endpoint test")
    config.addinivalue_line("markers", "services: mark test as service layer test")
    config.addinivalue_line("markers", "billing: mark test as billing-related")
    config.addinivalue_line("markers", "appointment: mark test as appointment-related")
    config.addinivalue_line("markers", "repositories: mark test as repository test")
    config.addinivalue_line("markers", "logging: mark test as logging-related")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location."""
    for item in items:
        path = str(item.fspath)
        if f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)
        if f"{os.sep}integration{os.sep}" in path:
            item.add_marker(pytest.mark.integration)


# =====================================================
# DATABASE FIXTURES
# =====================================================


@pytest.fixture
def clean_database():
    """Recreate every table so each test starts from an empty database."""
    drop_tables()
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def db_session(clean_database):
    """A real SQLAlchemy session bound to the in-memory test database."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


# =====================================================
# APPLICATION FIXTURES
# =====================================================


@pytest.fixture
def app(clean_database):
    """Flask application wired against the empty test database."""
    from clinic.main import create_app

    flask_app = create_app({"TESTING": True})
    yield flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
