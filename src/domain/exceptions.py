"""
Domain exceptions - Semantic error types for account activation.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

Invalid, expired and already-used codes are deliberately absent:
completion collapses them into a single False result.
"""


class ActivationError(Exception):
    """Base class for activation domain errors."""

    pass


class UserNotFound(ActivationError):
    """No user is registered under the requested email."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"User with email '{email}' not found")


class AlreadyActivated(ActivationError):
    """The user already holds a completed activation."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"User with email '{email}' is already activated")


class CodeSpaceExhausted(ActivationError):
    """Every generated candidate collided with an existing code."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Could not generate a unique activation code in {attempts} attempts")
