"""Notification DTOs."""

from dataclasses import dataclass

from dockdash.domain.entities import Notification
from dockdash.domain.value_objects import NotificationType


@dataclass
class NotificationCreateInput:
    """Payload submitted to the store when persisting a notification."""

    message: str
    type: NotificationType = NotificationType.INFO
    category: str | None = None
    action: str | None = None
    container_id: str | None = None
    container_name: str | None = None
    action_by: str | None = None
    action_by_user_id: str | None = None
    recommendation: str | None = None


@dataclass
class NotificationPage:
    """One page of durable notification history."""

    items: list[Notification]
    unread_count: int
    total: int
