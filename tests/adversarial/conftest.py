"""
Shared fixtures for adversarial tests.

Provides a service wired to the lock-protected in-memory store so
concurrency scenarios run without a database.
"""

from datetime import timedelta

import pytest

from src.adapters.codes.generator import SecretsCodeGenerator
from src.adapters.repository.memory import InMemoryActivationRepository
from src.domain.activation import ActivationService


@pytest.fixture
def shared_repository() -> InMemoryActivationRepository:
    return InMemoryActivationRepository()


@pytest.fixture
def shared_service(shared_repository: InMemoryActivationRepository) -> ActivationService:
    """Service instance shared across worker threads."""
    return ActivationService(
        repository=shared_repository,
        code_generator=SecretsCodeGenerator(),
        lifetime=timedelta(minutes=60),
    )
