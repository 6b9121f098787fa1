"""Notification feed - turns push events into at most one displayed notification."""

import logging
import time
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime

from dockdash.application.dto.notification_dto import (
    NotificationCreateInput,
    NotificationPage,
)
from dockdash.application.dto.push_event import DockerAlert, PushEvent
from dockdash.application.ports import NotificationStore
from dockdash.application.use_cases.notification.action_tracker import (
    SessionActionTracker,
)
from dockdash.domain.entities import Notification
from dockdash.domain.exceptions import DockDashError
from dockdash.domain.value_objects import NotificationType

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 10


def _local_id() -> str:
    return f"local-{time.time_ns()}"


class NotificationFeed:
    """Bounded, most-recent-first live feed backed by the notification store.

    Each push event goes through two suppression layers: the in-memory
    :class:`SessionActionTracker` (before persisting) and the server-resolved
    ``action_by_user_id`` (after persisting). Surviving events enter the feed
    unless an entry with the same durable id is already there. When the
    store is unreachable a local notification is shown instead, deduplicated
    on ``(message, container_name)``.

    The feed is replaced, never mutated in place. Eviction only affects the
    feed; the durable history is untouched.
    """

    def __init__(
        self,
        store: NotificationStore,
        tracker: SessionActionTracker,
        *,
        limit: int = DEFAULT_FEED_LIMIT,
        id_factory: Callable[[], str] = _local_id,
    ) -> None:
        self._store = store
        self._tracker = tracker
        self._limit = limit
        self._id_factory = id_factory
        self._items: tuple[Notification, ...] = ()
        self._user_id: str | None = None

    @property
    def items(self) -> list[Notification]:
        return list(self._items)

    @property
    def unread(self) -> list[Notification]:
        return [n for n in self._items if not n.is_read]

    @property
    def limit(self) -> int:
        return self._limit

    def set_user(self, user_id: str | None) -> None:
        """Set the session user whose own actions are hidden from the feed."""
        self._user_id = user_id

    def clear(self) -> None:
        self._items = ()

    def get(self, notification_id: str) -> Notification | None:
        for item in self._items:
            if item.id == notification_id:
                return item
        return None

    async def ingest(self, event: PushEvent) -> Notification | None:
        """Process one push event; returns the notification added to the feed."""
        if self._tracker.is_own_action(event.action, event.container_name):
            logger.debug(
                "Suppressed own %s echo for %s", event.action, event.container_name
            )
            return None

        draft = NotificationCreateInput(
            message=event.message,
            type=NotificationType.parse(event.type),
            category=event.category,
            action=event.action,
            container_id=event.container_id,
            container_name=event.container_name,
            recommendation=event.recommendation,
        )
        try:
            saved = await self._store.create(draft)
        except DockDashError as e:
            logger.warning("Failed to persist notification, showing local copy: %s", e)
            return self._add_local(self._local_from_event(event))

        if self._user_id and saved.action_by_user_id == self._user_id:
            logger.debug("Suppressed notification %s caused by current user", saved.id)
            return None

        notification = self._enrich(saved, event)
        return notification if self._add_durable(notification) else None

    def add(self, notification: Notification) -> Notification | None:
        """Add a notification created outside the push pipeline."""
        if notification.is_local:
            return self._add_local(notification)
        return notification if self._add_durable(notification) else None

    async def mark_as_read(self, notification_id: str) -> None:
        item = self.get(notification_id)
        if item is None or not item.is_local:
            try:
                await self._store.mark_as_read(notification_id)
            except DockDashError as e:
                logger.error("Failed to mark notification %s as read: %s", notification_id, e)
        self._replace_where(
            lambda n: n.id == notification_id and not n.is_read, self._as_read
        )

    async def interact(self, notification_id: str) -> None:
        """First interaction with an unread item marks it read."""
        item = self.get(notification_id)
        if item is not None and not item.is_read:
            await self.mark_as_read(notification_id)

    async def mark_all_as_read(self) -> None:
        try:
            await self._store.mark_all_as_read()
        except DockDashError as e:
            logger.error("Failed to mark all notifications as read: %s", e)
        self._replace_where(lambda n: not n.is_read, self._as_read)

    async def delete(self, notification_id: str) -> None:
        item = self.get(notification_id)
        if item is None or not item.is_local:
            try:
                await self._store.delete(notification_id)
            except DockDashError as e:
                logger.error("Failed to delete notification %s: %s", notification_id, e)
        self._items = tuple(n for n in self._items if n.id != notification_id)

    async def delete_all(self) -> None:
        try:
            await self._store.delete_all()
        except DockDashError as e:
            logger.error("Failed to delete all notifications: %s", e)
        self._items = ()

    async def delete_old_read(self, days_old: int = 7) -> int:
        """Drop read history older than days_old; the live feed is unaffected."""
        try:
            return await self._store.delete_old_read(days_old)
        except DockDashError as e:
            logger.error("Failed to delete old notifications: %s", e)
            return 0

    async def load_history(
        self, *, limit: int = 50, skip: int = 0, unread_only: bool = False
    ) -> NotificationPage:
        """Page of durable history; independent of the live feed."""
        return await self._store.list(limit=limit, skip=skip, unread_only=unread_only)

    def _add_durable(self, notification: Notification) -> bool:
        if any(n.id == notification.id for n in self._items):
            logger.debug("Notification %s already in feed", notification.id)
            return False
        self._push(notification)
        return True

    def _add_local(self, notification: Notification) -> Notification | None:
        for n in self._items:
            if (n.message, n.container_name) == (
                notification.message,
                notification.container_name,
            ):
                return None
        self._push(notification)
        return notification

    def _push(self, notification: Notification) -> None:
        self._items = (notification, *self._items)[: self._limit]

    def _replace_where(
        self,
        predicate: Callable[[Notification], bool],
        update: Callable[[Notification], Notification],
    ) -> None:
        self._items = tuple(update(n) if predicate(n) else n for n in self._items)

    @staticmethod
    def _as_read(notification: Notification) -> Notification:
        return replace(notification, is_read=True, read_at=datetime.now(UTC))

    @staticmethod
    def _enrich(saved: Notification, event: PushEvent) -> Notification:
        extra = {}
        if saved.category is None and event.category is not None:
            extra["category"] = event.category
        if saved.action is None and event.action:
            extra["action"] = event.action
        if saved.recommendation is None and event.recommendation:
            extra["recommendation"] = event.recommendation
        if isinstance(event, DockerAlert):
            extra["value"] = event.value
            extra["threshold"] = event.threshold
        return replace(saved, **extra) if extra else saved

    def _local_from_event(self, event: PushEvent) -> Notification:
        alert = isinstance(event, DockerAlert)
        return Notification(
            id=self._id_factory(),
            type=NotificationType.parse(event.type),
            message=event.message,
            created_at=event.timestamp,
            category=event.category,
            action=event.action,
            container_id=event.container_id,
            container_name=event.container_name,
            value=event.value if alert else None,
            threshold=event.threshold if alert else None,
            recommendation=event.recommendation,
            is_local=True,
        )
