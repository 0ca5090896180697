"""User-visible notifications returned to the dashboard client as toasts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Protocol

Level = Literal["success", "error"]


@dataclass(frozen=True)
class Notification:
    level: Level
    message: str


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass
class NotificationQueue:
    """Collects the notifications raised while handling one request."""

    items: List[Notification] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.items.append(Notification("success", message))

    def error(self, message: str) -> None:
        self.items.append(Notification("error", message))

    @property
    def errors(self) -> List[Notification]:
        return [item for item in self.items if item.level == "error"]

    def as_payload(self) -> List[dict]:
        return [{"level": item.level, "message": item.message} for item in self.items]
