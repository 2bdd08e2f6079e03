# krishi_jyothi/core/notifications.py
from typing import Literal

from pydantic import BaseModel

Variant = Literal["default", "destructive"]


class Notification(BaseModel):
    """A user-facing toast message returned alongside an API response."""

    title: str
    description: str
    variant: Variant = "default"


class NotificationCollector:
    """
    Request-scoped sink for notifications.

    Services push messages while they work; routers drain them into
    the response body.
    """

    def __init__(self):
        self._pending: list[Notification] = []

    def push(self, title: str, description: str, variant: Variant = "default") -> None:
        self._pending.append(
            Notification(title=title, description=description, variant=variant)
        )

    def drain(self) -> list[Notification]:
        pending, self._pending = self._pending, []
        return pending

    def __len__(self) -> int:
        return len(self._pending)
