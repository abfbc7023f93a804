"""
Flash notifications - Request-scoped one-shot messages.

A Notificator is created per request by a FastAPI dependency, collects
notifications while the request is handled, and writes them to the
response: as a list in JSON bodies, or as a cookie when redirecting
so the next page can display it.

Cookie format: "<type>::<text>", percent-encoded so the value is sent
without RFC 2109 quoting and reads back verbatim from document.cookie.
"""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote, unquote

from fastapi import Response

COOKIE_DELIMITER = "::"


class NotificationType(str, Enum):
    """Severity of a notification, used by the frontend for styling."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A human-readable message for the end user."""

    type: NotificationType
    text: str

    def to_cookie(self) -> str:
        return quote(f"{self.type.value}{COOKIE_DELIMITER}{self.text}", safe="")

    @classmethod
    def from_cookie(cls, value: str | None) -> "Notification | None":
        """
        Parse a flash cookie value.

        Returns:
            The notification, or None for missing or malformed values
        """
        if not value:
            return None
        value = unquote(value)
        if COOKIE_DELIMITER not in value:
            return None
        type_value, text = value.split(COOKIE_DELIMITER, 1)
        try:
            return cls(type=NotificationType(type_value), text=text)
        except ValueError:
            return None


class Notificator:
    """Collects the notifications of a single request."""

    def __init__(self, cookie_name: str, lifetime_minutes: int) -> None:
        self._cookie_name = cookie_name
        self._lifetime_minutes = lifetime_minutes
        self._notifications: list[Notification] = []

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    def notify(self, notification: Notification) -> None:
        self._notifications.append(notification)

    def success(self, text: str) -> None:
        self.notify(Notification(NotificationType.SUCCESS, text))

    def error(self, text: str) -> None:
        self.notify(Notification(NotificationType.ERROR, text))

    def flash(self, response: Response) -> None:
        """
        Store the latest notification in the flash cookie.

        Only one message fits in the cookie; earlier ones are dropped.
        The cookie stays readable by scripts so the frontend can show it.
        """
        if not self._notifications:
            return
        response.set_cookie(
            key=self._cookie_name,
            value=self._notifications[-1].to_cookie(),
            max_age=self._lifetime_minutes * 60,
            httponly=False,
        )
