"""HTTP notification store - /api/notifications endpoints."""

from urllib.parse import quote

from dockdash.application.dto.notification_dto import (
    NotificationCreateInput,
    NotificationPage,
)
from dockdash.domain.entities import Notification
from dockdash.domain.exceptions import ServiceUnavailable
from dockdash.infrastructure.http.api_client import DashboardApiClient
from dockdash.infrastructure.http.mappers import (
    count_from_json,
    notification_from_json,
    notification_to_json,
)

NOTIFICATIONS_PATH = "/api/notifications"


def _notification_path(notification_id: str) -> str:
    return f"{NOTIFICATIONS_PATH}/{quote(notification_id, safe='')}"


class HttpNotificationStore:
    """Notification store implementation."""

    def __init__(self, client: DashboardApiClient) -> None:
        self._client = client

    async def list(
        self, *, limit: int = 50, skip: int = 0, unread_only: bool = False
    ) -> NotificationPage:
        body = await self._client.get(
            NOTIFICATIONS_PATH, limit=limit, skip=skip, unreadOnly=unread_only
        )
        items = [notification_from_json(n) for n in body.get("data") or []]
        pagination = body.get("pagination") or {}
        return NotificationPage(
            items=items,
            unread_count=int(body.get("unreadCount") or 0),
            total=int(pagination.get("total") or len(items)),
        )

    async def create(self, data: NotificationCreateInput) -> Notification:
        """Persist; the server assigns id, createdAt, actionBy and actionByUserId."""
        body = await self._client.post(NOTIFICATIONS_PATH, notification_to_json(data))
        created = body.get("data")
        if not isinstance(created, dict):
            raise ServiceUnavailable("Notification missing from response")
        return notification_from_json(created)

    async def mark_as_read(self, notification_id: str) -> None:
        await self._client.patch(f"{_notification_path(notification_id)}/read")

    async def mark_all_as_read(self) -> int:
        return count_from_json(await self._client.patch(f"{NOTIFICATIONS_PATH}/read-all"))

    async def delete(self, notification_id: str) -> None:
        await self._client.delete(_notification_path(notification_id))

    async def delete_all(self) -> int:
        return count_from_json(await self._client.delete(NOTIFICATIONS_PATH))

    async def delete_old_read(self, days_old: int = 7) -> int:
        body = await self._client.delete(f"{NOTIFICATIONS_PATH}/old/cleanup", daysOld=days_old)
        return count_from_json(body)
