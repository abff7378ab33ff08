"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at an in-memory SQLite database.
"""

import os
import sys
from pathlib import Path

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from fastapi.testclient import TestClient

from domain.models import Database, get_db_session
from test_fixtures import seed_recipes


@pytest.fixture
def database():
    """Fresh in-memory database with every table created"""
    db = Database("sqlite://")
    db.init_schema()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    with database.session() as session:
        yield session


@pytest.fixture
def seeded_session(db_session):
    """Session over a recipe store holding the standard test recipes"""
    seed_recipes(db_session)
    return db_session


@pytest.fixture
def client(seeded_session):
    """TestClient whose requests share the seeded session"""
    from main import app

    def _override():
        yield seeded_session

    app.dependency_overrides[get_db_session] = _override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
