"""User-facing notifications collected during an operation."""

from dataclasses import dataclass
from enum import Enum


class NotificationLevel(Enum):
    """Severity of a notification."""
    INFO = "info"
    WARN = "warn"


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str

    @classmethod
    def info(cls, message: str) -> "Notification":
        return cls(NotificationLevel.INFO, message)

    @classmethod
    def warn(cls, message: str) -> "Notification":
        return cls(NotificationLevel.WARN, message)
