"""Pytest configuration and shared fixtures."""

import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator

# The application reads its configuration once, on first import
_TEST_DIR = Path(tempfile.mkdtemp(prefix="wellness-tests-"))
_TEST_DB_URL = f"sqlite:///{_TEST_DIR / 'wellness_test.db'}"

os.environ["WELLNESS_DATABASE_URL"] = _TEST_DB_URL
os.environ["WELLNESS_JWT_SECRET_KEY"] = (
    "t3st-Signing-K3y_for-W3llness-Pl4nner-0123456789-abcdefghijklmnopqrstuvwxyz"
)
os.environ["WELLNESS_CONFIG_FILE"] = str(_TEST_DIR / "config.json")
os.environ["WELLNESS_LOG_TO_FILE"] = "0"
os.environ.pop("WELLNESS_DEV_MODE", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

USER_A = "user_a_2f8c"
USER_B = "user_b_91d0"


@pytest.fixture(scope="session")
def setup_test_env():
    """Apply Alembic migrations to the temporary SQLite database."""
    from wellness_planner.launcher import run_migrations

    run_migrations(_TEST_DB_URL)
    yield _TEST_DB_URL


@pytest.fixture
def test_db(setup_test_env):
    """Session factory on the migrated database; tables are emptied afterwards."""
    from wellness_planner.db.database import create_database_engine

    engine = create_database_engine(setup_test_env)
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )

    yield TestingSessionLocal

    with engine.begin() as conn:
        conn.execute(text("DELETE FROM wellness_reflections"))
        conn.execute(text("DELETE FROM wellness_goals"))
        conn.execute(text("DELETE FROM wellness_areas"))
    engine.dispose()


@pytest.fixture
def db_session(test_db):
    """A database session for direct queries in tests."""
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def client(test_db) -> Generator[TestClient, None, None]:
    """Create a test client with database dependency override."""
    from wellness_planner.db.database import get_db
    from wellness_planner.main import app

    def override_get_db():
        # Use a fresh session per request in tests
        db = test_db()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clear overrides to avoid affecting other tests
    app.dependency_overrides.clear()


@pytest.fixture
def make_auth_headers() -> Callable[[str], Dict[str, str]]:
    """Factory for bearer headers of an arbitrary user."""
    from wellness_planner.auth.jwt_auth import jwt_manager

    def _make(user_id: str) -> Dict[str, str]:
        token = jwt_manager.create_access_token(user_id)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def auth_headers(make_auth_headers) -> Dict[str, str]:
    """Bearer headers for user A."""
    return make_auth_headers(USER_A)


@pytest.fixture
def other_auth_headers(make_auth_headers) -> Dict[str, str]:
    """Bearer headers for user B."""
    return make_auth_headers(USER_B)


@pytest.fixture
def memory_repos():
    """Repository container backed by the in-memory store."""
    from wellness_planner.repositories.memory_impl import create_memory_container

    return create_memory_container()


@pytest.fixture
def user_a() -> str:
    return USER_A


@pytest.fixture
def user_b() -> str:
    return USER_B


@pytest.fixture
def ticking_clock(monkeypatch):
    """Make every action see a clock that advances one second per call."""
    from datetime import datetime, timedelta, timezone

    from wellness_planner.services import areas, goals, reflections

    state = {"now": datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)}

    def tick():
        state["now"] += timedelta(seconds=1)
        return state["now"]

    for module in (areas, goals, reflections):
        monkeypatch.setattr(module, "utcnow", tick)
    return tick
