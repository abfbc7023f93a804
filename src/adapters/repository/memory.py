"""
In-memory repository adapters - Process-local persistence.

Used by the unit and adversarial tests in place of PostgreSQL. A single
lock serializes every operation, giving the same per-operation
consistency the service expects from PostgreSQL.
"""

import threading
from itertools import count

from src.domain.models import Activation, User


class InMemoryActivationRepository:
    """
    Implements ActivationRepository protocol with a dict keyed by id.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Activations are frozen, so stored values cannot be mutated by callers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = count(1)
        self._activations: dict[int, Activation] = {}

    def create(self, activation: Activation) -> Activation:
        """
        Store a new activation and assign it an id.

        Raises:
            ValueError: If the code is already held by another activation
        """
        with self._lock:
            if any(a.code == activation.code for a in self._activations.values()):
                raise ValueError(f"Duplicate activation code for user {activation.user_id}")
            stored = Activation(
                id=next(self._ids),
                user_id=activation.user_id,
                code=activation.code,
                created_at=activation.created_at,
                completed_at=activation.completed_at,
            )
            self._activations[stored.id] = stored
            return stored

    def find_by_code(self, code: str) -> Activation | None:
        with self._lock:
            for activation in self._activations.values():
                if activation.code == code:
                    return activation
            return None

    def find_by_user(self, user_id: int) -> list[Activation]:
        with self._lock:
            found = [a for a in self._activations.values() if a.user_id == user_id]
        return sorted(found, key=lambda a: (a.created_at, a.id))

    def delete_by_user(self, user_id: int) -> int:
        with self._lock:
            doomed = [key for key, a in self._activations.items() if a.user_id == user_id]
            for key in doomed:
                del self._activations[key]
            return len(doomed)

    def update(self, activation: Activation) -> bool:
        """
        Replace a stored activation (matched by id) while it is pending.

        Returns:
            False if the stored record is already completed

        Raises:
            ValueError: If the activation was never persisted
        """
        with self._lock:
            if activation.id is None or activation.id not in self._activations:
                raise ValueError("Cannot update an activation that is not stored")
            if self._activations[activation.id].is_completed:
                return False
            self._activations[activation.id] = activation
            return True

    def all(self) -> list[Activation]:
        """Snapshot of every stored activation."""
        with self._lock:
            return list(self._activations.values())


class InMemoryUserDirectory:
    """Implements UserDirectory protocol over a fixed set of users."""

    def __init__(self, users: list[User] | None = None) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        for user in users or []:
            self.add(user)

    def add(self, user: User) -> None:
        with self._lock:
            self._users[user.email.lower()] = user

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            return self._users.get(email.lower())
