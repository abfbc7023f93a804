"""
PostgreSQL repository adapters - Implement ActivationRepository and UserDirectory.

This module provides the PostgreSQL implementations of the domain's
persistence ports using psycopg3 with raw SQL.

Consistency notes:
- activations.code carries a UNIQUE constraint, so a code collision lost
  to a concurrent insert surfaces as psycopg.errors.UniqueViolation
  instead of a duplicate row.
- Every method runs on its own pooled connection and commits before
  returning; the service's delete-then-create in issue() is two
  separate transactions.
"""

import logging
from datetime import datetime
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.models import Activation, User

logger = logging.getLogger(__name__)

# src/adapters/repository/postgres.py -> <project root>/migrations
MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"

_ACTIVATION_COLUMNS = "id, user_id, code, created_at, completed_at"


def _row_to_activation(row: tuple[int, int, str, datetime, datetime | None]) -> Activation:
    return Activation(
        id=row[0],
        user_id=row[1],
        code=row[2],
        created_at=row[3],
        completed_at=row[4],
    )


class PostgresActivationRepository:
    """
    Implements ActivationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def create(self, activation: Activation) -> Activation:
        """
        Insert a new activation row.

        Returns:
            The activation with its database id
        """
        sql = """
            INSERT INTO activations (user_id, code, created_at, completed_at)
            VALUES (%s, %s, %s, %s)
            RETURNING id
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    activation.user_id,
                    activation.code,
                    activation.created_at,
                    activation.completed_at,
                ),
            )
            row = cursor.fetchone()
            conn.commit()

        return Activation(
            id=row[0],
            user_id=activation.user_id,
            code=activation.code,
            created_at=activation.created_at,
            completed_at=activation.completed_at,
        )

    def find_by_code(self, code: str) -> Activation | None:
        sql = f"SELECT {_ACTIVATION_COLUMNS} FROM activations WHERE code = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (code,))
            row = cursor.fetchone()

        return _row_to_activation(row) if row is not None else None

    def find_by_user(self, user_id: int) -> list[Activation]:
        sql = f"""
            SELECT {_ACTIVATION_COLUMNS}
            FROM activations
            WHERE user_id = %s
            ORDER BY created_at, id
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (user_id,))
            rows = cursor.fetchall()

        return [_row_to_activation(row) for row in rows]

    def delete_by_user(self, user_id: int) -> int:
        sql = "DELETE FROM activations WHERE user_id = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (user_id,))
            conn.commit()
            return cursor.rowcount

    def update(self, activation: Activation) -> bool:
        """
        Write back the mutable columns of an activation.

        Only completed_at changes over a record's lifetime; the row is
        matched by id and only while completed_at is still NULL, so the
        row lock taken by UPDATE lets one concurrent completion through.

        Returns:
            True if a pending row was updated

        Raises:
            ValueError: If the activation was never persisted
        """
        if activation.id is None:
            raise ValueError("Cannot update an activation without an id")

        sql = """
            UPDATE activations SET completed_at = %s
            WHERE id = %s AND completed_at IS NULL
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (activation.completed_at, activation.id))
            conn.commit()
            return cursor.rowcount == 1


class PostgresUserDirectory:
    """Implements UserDirectory protocol over the users table."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def find_by_email(self, email: str) -> User | None:
        """
        Find a user by email, case-insensitively.

        Args:
            email: Normalized email address

        Returns:
            The User if found, None otherwise
        """
        sql = "SELECT id, email FROM users WHERE lower(email) = lower(%s)"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()

        return User(id=row[0], email=row[1]) if row is not None else None


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
    """
    Apply the schema for users and activations.

    Files run in filename order, each on its own connection. They are
    written to be idempotent (IF NOT EXISTS), so every startup replays
    all of them.

    Args:
        pool: psycopg3 ConnectionPool instance
        migrations_dir: Directory holding the *.sql files

    Returns:
        Names of the files that were executed

    Raises:
        RuntimeError: If a migration fails, chained from the database error
    """
    if not migrations_dir.is_dir():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return []

    applied: list[str] = []
    for sql_file in sorted(migrations_dir.glob("*.sql")):
        try:
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())
        except (OSError, psycopg.Error) as e:
            logger.error("Migration %s failed: %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
        logger.debug("Migration applied: %s", sql_file.name)
        applied.append(sql_file.name)

    logger.info("Schema up to date (%d migration file(s))", len(applied))
    return applied
