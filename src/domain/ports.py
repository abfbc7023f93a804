"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol

from .models import Activation, User


class ActivationRepository(Protocol):
    """
    Port interface for activation persistence.

    The store holds no business rules: expiry, supersede and
    single-use semantics all live in the activation service.
    """

    def create(self, activation: Activation) -> Activation:
        """
        Persist a new activation.

        Args:
            activation: Activation without an id

        Returns:
            The stored activation with its store-assigned id
        """
        ...

    def find_by_code(self, code: str) -> Activation | None:
        """
        Find the activation holding the given code.

        Returns:
            The activation if found, None otherwise
        """
        ...

    def find_by_user(self, user_id: int) -> list[Activation]:
        """
        List every activation of a user.

        Returns:
            Activations ordered by created_at, then id (oldest first)
        """
        ...

    def delete_by_user(self, user_id: int) -> int:
        """
        Delete every activation of a user.

        Returns:
            Number of deleted records
        """
        ...

    def update(self, activation: Activation) -> bool:
        """
        Persist changes to an existing activation (matched by id).

        The write only applies while the stored record is still pending,
        so of two concurrent completions exactly one succeeds.

        Args:
            activation: Previously stored activation

        Returns:
            True if the record was written, False if it was already completed
        """
        ...


class CodeGenerator(Protocol):
    """Port interface for random code production."""

    def generate(self, length: int) -> str:
        """
        Generate a random code.

        Args:
            length: Exact number of characters in the code

        Returns:
            Random code; uniqueness is NOT guaranteed by the generator
        """
        ...


class UserDirectory(Protocol):
    """Port interface for resolving user identities."""

    def find_by_email(self, email: str) -> User | None:
        """
        Find a user by normalized email address.

        Returns:
            The User if found, None otherwise
        """
        ...


class ActivationMailer(Protocol):
    """Port interface for activation link delivery."""

    def send_activation(self, email: str, code: str) -> None:
        """
        Send the activation link for a code.

        Args:
            email: Recipient email address
            code: Activation code to embed in the link
        """
        ...


class Activator(Protocol):
    """
    Activation capability consumed by the workflow.

    Implemented by ActivationService; kept as a protocol so callers
    depend on the capability rather than the concrete class.
    """

    def issue(self, user: User) -> Activation: ...

    def issue_pre_activated(self, user: User) -> Activation: ...

    def complete(self, code: str) -> bool: ...

    def is_expired(self, activation: Activation) -> bool: ...

    def is_activated(self, user: User) -> bool: ...

    def find_completed_activation(self, user: User) -> Activation | None: ...
