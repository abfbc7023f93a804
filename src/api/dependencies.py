"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from datetime import timedelta

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.codes.generator import SecretsCodeGenerator
from src.adapters.repository.postgres import PostgresActivationRepository, PostgresUserDirectory
from src.adapters.smtp.console import ConsoleActivationMailer
from src.api.notifications import Notificator
from src.config.settings import Settings, get_settings
from src.domain.activation import ActivationService
from src.domain.ports import ActivationRepository
from src.domain.workflow import ActivationWorkflow

# Module-level singleton - SecretsCodeGenerator is stateless
_code_generator = SecretsCodeGenerator()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_code_generator() -> SecretsCodeGenerator:
    """Get code generator (singleton)."""
    return _code_generator


def build_activation_service(
    settings: Settings, repository: ActivationRepository
) -> ActivationService:
    """
    Configure an activation service from settings.

    Code lifetime, length and the collision retry cap all come from
    the activation_* settings.
    """
    return ActivationService(
        repository=repository,
        code_generator=get_code_generator(),
        lifetime=timedelta(minutes=settings.activation_lifetime_minutes),
        code_length=settings.activation_code_length,
        max_code_attempts=settings.activation_max_code_attempts,
    )


def get_activation_service(
    request: Request, settings: Settings = Depends(get_settings)
) -> ActivationService:
    """Activation service backed by the PostgreSQL store."""
    return build_activation_service(settings, PostgresActivationRepository(get_pool(request)))


def get_activation_workflow(
    request: Request,
    settings: Settings = Depends(get_settings),
    service: ActivationService = Depends(get_activation_service),
) -> ActivationWorkflow:
    """Create the re-send/complete workflow around the activation service."""
    return ActivationWorkflow(
        activator=service,
        users=PostgresUserDirectory(get_pool(request)),
        mailer=ConsoleActivationMailer(settings.app_url),
    )


def get_notificator(settings: Settings = Depends(get_settings)) -> Notificator:
    """Fresh notification collector for the current request."""
    return Notificator(
        cookie_name=settings.flash_cookie_name,
        lifetime_minutes=settings.flash_cookie_lifetime_minutes,
    )
