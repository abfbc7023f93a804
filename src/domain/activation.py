"""
Activation domain service - Activation code lifecycle.

This module contains the core business logic for account activation:
issuing one-time codes, expiring them, and redeeming them exactly once.

Activation Lifecycle
====================

States (per record):
- PENDING: Issued, completed_at is NULL
- COMPLETED: Redeemed, completed_at set (terminal)
- EXPIRED: PENDING and now - created_at > lifetime (evaluated lazily)

Transitions:
    (none)    -> PENDING    issue()                supersedes prior records
    (none)    -> COMPLETED  issue_pre_activated()  keeps prior records
    PENDING   -> COMPLETED  complete()             only while not expired
    any       -> (deleted)  issue() for same user

Expiry is never persisted: an expired record stays in the store until
it is superseded, and complete() rejects it on read.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from .exceptions import CodeSpaceExhausted
from .models import Activation, User
from .ports import ActivationRepository, CodeGenerator

logger = logging.getLogger(__name__)

DEFAULT_CODE_LENGTH = 32
DEFAULT_MAX_CODE_ATTEMPTS = 10


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class ActivationService:
    """
    Domain service owning the activation lifecycle rules.

    The repository is dumb storage; every rule about supersede,
    expiry and single use is enforced here.
    """

    repository: ActivationRepository
    code_generator: CodeGenerator
    lifetime: timedelta
    code_length: int = DEFAULT_CODE_LENGTH
    max_code_attempts: int = DEFAULT_MAX_CODE_ATTEMPTS
    clock: Callable[[], datetime] = field(default=utcnow)

    def issue(self, user: User) -> Activation:
        """
        Issue a pending activation, superseding any previous ones.

        Deletes every existing activation of the user (completed ones
        included), then stores a fresh pending record.

        Args:
            user: User receiving the code

        Returns:
            The stored pending activation

        Raises:
            CodeSpaceExhausted: If no unique code was found
        """
        deleted = self.repository.delete_by_user(user.id)
        code = self._generate_unique_code()
        activation = self.repository.create(
            Activation(user_id=user.id, code=code, created_at=self.clock())
        )
        logger.info("Activation issued for user %s (superseded %d)", user.id, deleted)
        return activation

    def issue_pre_activated(self, user: User) -> Activation:
        """
        Issue an activation that is already completed.

        Used for accounts that must be active immediately (e.g. created
        by an administrator). Prior records are left in place.

        Raises:
            CodeSpaceExhausted: If no unique code was found
        """
        code = self._generate_unique_code()
        now = self.clock()
        activation = self.repository.create(
            Activation(user_id=user.id, code=code, created_at=now, completed_at=now)
        )
        logger.info("Pre-activated activation issued for user %s", user.id)
        return activation

    def complete(self, code: str) -> bool:
        """
        Redeem an activation code.

        Returns False without touching the store when the code is
        unknown, expired or already completed. The caller gets no
        indication of which check failed.

        Args:
            code: Code taken from the activation link

        Returns:
            True if the activation was completed by this call
        """
        activation = self.repository.find_by_code(code)
        if activation is None:
            logger.debug("Activation completion rejected: unknown code")
            return False

        if self.is_expired(activation):
            logger.debug("Activation completion rejected: expired (user %s)", activation.user_id)
            return False

        if activation.is_completed:
            logger.debug(
                "Activation completion rejected: already completed (user %s)",
                activation.user_id,
            )
            return False

        if not self.repository.update(activation.completed(self.clock())):
            logger.debug(
                "Activation completion rejected: completed concurrently (user %s)",
                activation.user_id,
            )
            return False

        logger.info("Activation completed for user %s", activation.user_id)
        return True

    def is_expired(self, activation: Activation) -> bool:
        """
        Check whether an activation outlived its lifetime.

        Strictly greater-than: a record exactly `lifetime` old is
        still valid.
        """
        return self.clock() - activation.created_at > self.lifetime

    def is_activated(self, user: User) -> bool:
        """True if any activation of the user is completed."""
        return any(a.is_completed for a in self.repository.find_by_user(user.id))

    def find_completed_activation(self, user: User) -> Activation | None:
        """
        Get the user's completed activation.

        Returns the oldest completed record when several exist
        (possible after issue_pre_activated), None if there is none.
        """
        for activation in self.repository.find_by_user(user.id):
            if activation.is_completed:
                return activation
        return None

    def _generate_unique_code(self) -> str:
        """
        Generate a code not held by any existing activation.

        Uniqueness is only checked against records currently in the
        store, not against historical (deleted) codes.
        """
        for attempt in range(1, self.max_code_attempts + 1):
            code = self.code_generator.generate(self.code_length)
            if self.repository.find_by_code(code) is None:
                return code
            logger.debug("Activation code collision (attempt %d)", attempt)

        logger.error(
            "Activation code space exhausted after %d attempts (length %d)",
            self.max_code_attempts,
            self.code_length,
        )
        raise CodeSpaceExhausted(self.max_code_attempts)
