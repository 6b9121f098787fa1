"""Notification API resources - live feed and durable history."""

import falcon.asgi

from dockdash.application.use_cases.notification.notification_feed import (
    NotificationFeed,
)
from dockdash.interfaces.api.resources.session import _require_user
from dockdash.interfaces.api.serializers import notification_media


class FeedResource:
    """GET /v1/notifications/feed - live bell feed (most recent first)."""

    def __init__(self, feed: NotificationFeed) -> None:
        self._feed = feed

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not _require_user(req, resp):
            return
        items = self._feed.unread if req.get_param_as_bool("unread_only") else self._feed.items
        resp.media = {
            "items": [notification_media(n) for n in items],
            "unread_count": len(self._feed.unread),
        }
        resp.status = falcon.HTTP_200


class HistoryResource:
    """GET /v1/notifications/history - durable history page."""

    def __init__(self, feed: NotificationFeed) -> None:
        self._feed = feed

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not _require_user(req, resp):
            return
        limit = req.get_param_as_int("limit") or 50
        limit = min(max(limit, 1), 100)
        skip = max(req.get_param_as_int("skip") or 0, 0)
        unread_only = bool(req.get_param_as_bool("unread_only"))

        page = await self._feed.load_history(limit=limit, skip=skip, unread_only=unread_only)
        resp.media = {
            "items": [notification_media(n) for n in page.items],
            "unread_count": page.unread_count,
            "total": page.total,
        }
        resp.status = falcon.HTTP_200


class NotificationReadResource:
    """POST /v1/notifications/{notification_id}/read - mark one as read."""

    def __init__(self, feed: NotificationFeed) -> None:
        self._feed = feed

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, notification_id: str
    ) -> None:
        if not _require_user(req, resp):
            return
        await self._feed.mark_as_read(notification_id)
        resp.status = falcon.HTTP_204


class NotificationsReadAllResource:
    """POST /v1/notifications/read-all - mark every notification read."""

    def __init__(self, feed: NotificationFeed) -> None:
        self._feed = feed

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not _require_user(req, resp):
            return
        await self._feed.mark_all_as_read()
        resp.status = falcon.HTTP_204


class NotificationResource:
    """DELETE /v1/notifications/{notification_id}."""

    def __init__(self, feed: NotificationFeed) -> None:
        self._feed = feed

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, notification_id: str
    ) -> None:
        if not _require_user(req, resp):
            return
        await self._feed.delete(notification_id)
        resp.status = falcon.HTTP_204


class NotificationsResource:
    """DELETE /v1/notifications - everything, or read items older than ``days_old``."""

    def __init__(self, feed: NotificationFeed) -> None:
        self._feed = feed

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not _require_user(req, resp):
            return
        days_old = req.get_param_as_int("days_old")
        if days_old is not None:
            deleted = await self._feed.delete_old_read(max(days_old, 0))
            resp.media = {"deleted": deleted}
            resp.status = falcon.HTTP_200
            return
        await self._feed.delete_all()
        resp.status = falcon.HTTP_204
