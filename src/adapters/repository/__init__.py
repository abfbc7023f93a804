"""Repository adapters - Database and in-memory implementations."""

from .memory import InMemoryActivationRepository, InMemoryUserDirectory
from .postgres import PostgresActivationRepository, PostgresUserDirectory, run_migrations

__all__ = [
    "InMemoryActivationRepository",
    "InMemoryUserDirectory",
    "PostgresActivationRepository",
    "PostgresUserDirectory",
    "run_migrations",
]
