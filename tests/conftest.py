"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock
- In-memory activation store and user directory
- A wired ActivationService
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.adapters.codes.generator import SecretsCodeGenerator
from src.adapters.repository.memory import InMemoryActivationRepository, InMemoryUserDirectory
from src.domain.activation import ActivationService
from src.domain.models import User

LIFETIME = timedelta(minutes=60)


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def repository() -> InMemoryActivationRepository:
    return InMemoryActivationRepository()


@pytest.fixture
def user() -> User:
    return User(id=1, email="user@example.com")


@pytest.fixture
def other_user() -> User:
    return User(id=2, email="other@example.com")


@pytest.fixture
def users(user: User, other_user: User) -> InMemoryUserDirectory:
    return InMemoryUserDirectory([user, other_user])


@pytest.fixture
def service(repository: InMemoryActivationRepository, clock: FrozenClock) -> ActivationService:
    return ActivationService(
        repository=repository,
        code_generator=SecretsCodeGenerator(),
        lifetime=LIFETIME,
        clock=clock,
    )
