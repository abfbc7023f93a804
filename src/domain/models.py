"""
Domain entities - User reference and Activation record.

Plain dataclasses with no persistence concerns. The activation store
owns persisted instances; the domain only passes copies around.
"""

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class User:
    """Identity of an account owned by the surrounding application."""

    id: int
    email: str


@dataclass(frozen=True)
class Activation:
    """
    One issued activation code for one user.

    Attributes:
        user_id: Owning user's identifier (reference, not ownership)
        code: Opaque fixed-length code, unique among existing activations
        created_at: Issue time (timezone-aware UTC)
        completed_at: Redemption time, None while pending
        id: Store-assigned identifier, None before persistence
    """

    user_id: int
    code: str
    created_at: datetime
    completed_at: datetime | None = None
    id: int | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def completed(self, at: datetime) -> "Activation":
        """Return a copy marked completed at the given time."""
        return replace(self, completed_at=at)
