"""
Activation workflow - Caller-facing policy above the activation service.

Resolves identities and refuses to re-send codes to verified
accounts before delegating to the activator.
"""

import logging
from dataclasses import dataclass

from .exceptions import AlreadyActivated, UserNotFound
from .models import Activation
from .ports import ActivationMailer, Activator, UserDirectory

logger = logging.getLogger(__name__)


@dataclass
class ActivationWorkflow:
    """Orchestrates re-send and completion requests."""

    activator: Activator
    users: UserDirectory
    mailer: ActivationMailer

    def resend(self, email: str) -> Activation:
        """
        Issue a fresh activation code and mail it.

        Args:
            email: User's email address (will be normalized)

        Returns:
            The newly issued activation

        Raises:
            UserNotFound: If no user has this email
            AlreadyActivated: If the user is already activated
        """
        normalized_email = self._normalize_email(email)
        user = self.users.find_by_email(normalized_email)
        if user is None:
            raise UserNotFound(normalized_email)

        if self.activator.is_activated(user):
            raise AlreadyActivated(normalized_email)

        activation = self.activator.issue(user)
        self.mailer.send_activation(user.email, activation.code)
        logger.info("Activation re-sent for user %s", user.id)
        return activation

    def complete(self, code: str) -> bool:
        """Redeem a code taken from an activation link."""
        return self.activator.complete(code)

    def _normalize_email(self, email: str) -> str:
        """Applies: strip whitespace + lowercase"""
        return email.strip().lower()
