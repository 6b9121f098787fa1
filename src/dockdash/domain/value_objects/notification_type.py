"""Notification severity types."""

from enum import StrEnum


class NotificationType(StrEnum):
    """Severity of a dashboard notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @classmethod
    def parse(cls, value: str | None) -> "NotificationType":
        """Parse server value; unknown or missing values fall back to INFO."""
        try:
            return cls(value) if value else cls.INFO
        except ValueError:
            return cls.INFO
