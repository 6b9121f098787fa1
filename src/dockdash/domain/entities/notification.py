"""Notification entity - durable or locally synthesized feed item."""

from dataclasses import dataclass
from datetime import datetime

from dockdash.domain.value_objects import NotificationType


@dataclass(frozen=True)
class Notification:
    """Notification shown in the live feed and kept in the durable history.

    ``is_local`` marks items synthesized while the backend was unreachable;
    their ``id`` is time based and not known to the store.
    """

    id: str
    type: NotificationType
    message: str
    created_at: datetime
    category: str | None = None
    action: str | None = None
    container_id: str | None = None
    container_name: str | None = None
    action_by: str | None = None
    action_by_user_id: str | None = None
    value: float | None = None
    threshold: float | None = None
    recommendation: str | None = None
    is_read: bool = False
    read_at: datetime | None = None
    is_local: bool = False
