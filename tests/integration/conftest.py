"""
Shared fixtures for integration tests.

Provides a connection pool to the configured PostgreSQL database.
Tests requesting the pool are skipped when the database is unreachable.
"""

from collections.abc import Callable, Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings
from src.domain.models import User


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests and apply migrations."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=3):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture(autouse=True)
def clean_database(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Clean activation tables before each database-backed test."""
    if "pool" in request.fixturenames:
        pool = request.getfixturevalue("pool")
        with pool.connection() as conn:
            conn.execute("DELETE FROM activations")
            conn.execute("DELETE FROM users")
            conn.commit()
    yield


@pytest.fixture
def make_user(pool: ConnectionPool) -> Callable[[str], User]:
    """Factory inserting a user row and returning it."""

    def create_user(email: str) -> User:
        with pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("INSERT INTO users (email) VALUES (%s) RETURNING id", (email,))
            user_id = cursor.fetchone()[0]
            conn.commit()
        return User(id=user_id, email=email)

    return create_user
