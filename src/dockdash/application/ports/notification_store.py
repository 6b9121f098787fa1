"""Notification store port - durable notification history."""

from typing import Protocol

from dockdash.application.dto.notification_dto import (
    NotificationCreateInput,
    NotificationPage,
)
from dockdash.domain.entities import Notification


class NotificationStore(Protocol):
    """Port for notification persistence."""

    async def list(
        self, *, limit: int = 50, skip: int = 0, unread_only: bool = False
    ) -> NotificationPage: ...

    async def create(self, data: NotificationCreateInput) -> Notification: ...

    async def mark_as_read(self, notification_id: str) -> None: ...

    async def mark_all_as_read(self) -> int: ...

    async def delete(self, notification_id: str) -> None: ...

    async def delete_all(self) -> int: ...

    async def delete_old_read(self, days_old: int = 7) -> int: ...
