"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for account activation.
It defines its own port interfaces for infrastructure abstraction,
ensuring true hexagonal architecture decoupling.
"""

from .activation import ActivationService
from .exceptions import ActivationError, AlreadyActivated, CodeSpaceExhausted, UserNotFound
from .models import Activation, User
from .ports import (
    ActivationMailer,
    ActivationRepository,
    Activator,
    CodeGenerator,
    UserDirectory,
)
from .workflow import ActivationWorkflow

__all__ = [
    "Activation",
    "ActivationError",
    "ActivationMailer",
    "ActivationRepository",
    "ActivationService",
    "ActivationWorkflow",
    "Activator",
    "AlreadyActivated",
    "CodeGenerator",
    "CodeSpaceExhausted",
    "User",
    "UserDirectory",
    "UserNotFound",
]
