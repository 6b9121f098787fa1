"""Push event DTOs - records emitted by the push-event source."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

DOCKER_EVENT = "dockerEvent"
DOCKER_ALERT = "dockerAlert"


def parse_timestamp(value: Any) -> datetime:
    """Parse ISO-8601 timestamp; missing or malformed values become now (UTC)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return datetime.now(UTC)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return datetime.now(UTC)


def _optional_float(value: Any) -> float | None:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class DockerEvent:
    """Container lifecycle event (start, stop, restart, die, ...)."""

    action: str
    type: str
    message: str
    timestamp: datetime
    category: str | None = None
    container_id: str | None = None
    container_name: str | None = None
    image: str | None = None
    recommendation: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DockerEvent":
        return cls(
            action=payload.get("action") or "",
            type=payload.get("type") or "info",
            message=payload.get("message") or "",
            timestamp=parse_timestamp(payload.get("timestamp")),
            category=payload.get("category"),
            container_id=payload.get("containerId"),
            container_name=payload.get("containerName"),
            image=payload.get("image"),
            recommendation=payload.get("recommendation"),
        )


@dataclass(frozen=True)
class DockerAlert:
    """Threshold alert (CPU / memory) for a container."""

    type: str
    message: str
    timestamp: datetime
    category: str | None = None
    value: float | None = None
    threshold: float | None = None
    container_id: str | None = None
    container_name: str | None = None
    recommendation: str | None = None

    @property
    def action(self) -> None:
        """Alerts are never caused by a user action."""
        return None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DockerAlert":
        return cls(
            type=payload.get("type") or "warning",
            message=payload.get("message") or "",
            timestamp=parse_timestamp(payload.get("timestamp")),
            category=payload.get("category"),
            value=_optional_float(payload.get("value")),
            threshold=_optional_float(payload.get("threshold")),
            container_id=payload.get("containerId"),
            container_name=payload.get("containerName"),
            recommendation=payload.get("recommendation"),
        )


PushEvent = DockerEvent | DockerAlert


def parse_push_event(name: str, payload: dict[str, Any]) -> PushEvent | None:
    """Build the DTO for a named push event; unknown names give None."""
    if name == DOCKER_EVENT:
        return DockerEvent.from_payload(payload)
    if name == DOCKER_ALERT:
        return DockerAlert.from_payload(payload)
    return None
