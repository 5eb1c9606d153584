"""
Pytest configuration file for backend testing.
"""
import os
import sys
from pathlib import Path

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Tests run against a private in-memory database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from core.database import Base, engine, get_db  # noqa: E402
from modules.catalog.models import catalog_models  # noqa: E402,F401
from modules.catalog.services.store import DashboardStore  # noqa: E402
from tests.factories.base import TestSession  # noqa: E402


@pytest.fixture
def db_session():
    """Fresh schema per test, dropped again afterwards."""
    Base.metadata.create_all(bind=engine)
    TestSession.configure(bind=engine)
    session = TestSession()

    yield session

    session.close()
    TestSession.remove()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db_session):
    return DashboardStore(db_session)


@pytest.fixture
def client(db_session):
    """Create a test client."""
    from app.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()
