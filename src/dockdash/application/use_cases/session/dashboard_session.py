"""Dashboard session - single session-state object with init/teardown lifecycle."""

import logging
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager

from dockdash.application.dto.push_event import PushEvent
from dockdash.application.ports import AuthService, PushEventHandler, PushEventSource
from dockdash.application.use_cases.notification.action_tracker import (
    SessionActionTracker,
)
from dockdash.application.use_cases.notification.notification_feed import (
    NotificationFeed,
)
from dockdash.application.use_cases.session.permission_resolver import (
    PermissionResolver,
)
from dockdash.domain.entities import SessionUser
from dockdash.domain.exceptions import DockDashError, Unauthorized

logger = logging.getLogger(__name__)


@asynccontextmanager
async def push_connection(
    source: PushEventSource, handler: PushEventHandler
) -> AsyncIterator[PushEventSource]:
    """Hold the push connection for the enclosed scope; always released."""
    source.subscribe(handler)
    try:
        await source.connect()
        yield source
    finally:
        source.unsubscribe(handler)
        await source.disconnect()


class DashboardSession:
    """Authenticated session: user, permissions, live feed and push connection.

    Consumers receive this object (or its parts) by injection; nothing here
    is module-global. ``init`` wires a user in, ``teardown`` releases every
    session-scoped resource.
    """

    def __init__(
        self,
        auth: AuthService,
        resolver: PermissionResolver,
        feed: NotificationFeed,
        tracker: SessionActionTracker,
        push_source: PushEventSource | None = None,
    ) -> None:
        self._auth = auth
        self._resolver = resolver
        self._feed = feed
        self._tracker = tracker
        self._push_source = push_source
        self._user: SessionUser | None = None
        self._resources: AsyncExitStack | None = None

    @property
    def user(self) -> SessionUser | None:
        return self._user

    @property
    def resolver(self) -> PermissionResolver:
        return self._resolver

    @property
    def feed(self) -> NotificationFeed:
        return self._feed

    @property
    def tracker(self) -> SessionActionTracker:
        return self._tracker

    @property
    def push_connected(self) -> bool:
        return self._push_source is not None and self._push_source.connected

    async def login(self, email: str, password: str) -> SessionUser:
        """Authenticate and start the session."""
        user = await self._auth.login(email, password)
        await self.init(user)
        return user

    async def restore(self) -> SessionUser | None:
        """Resume a session from the backend's cookie session.

        Only an explicit 401 logs the user out; network errors keep the
        current user.
        """
        try:
            user = await self._auth.current_user()
        except Unauthorized:
            user = None
        except DockDashError as e:
            logger.warning("Could not verify session, keeping current state: %s", e)
            return self._user

        if user is None:
            await self._end_session()
        else:
            await self.init(user)
        return user

    async def logout(self) -> None:
        """End the session remotely (best effort) and locally."""
        try:
            await self._auth.logout()
        except DockDashError as e:
            logger.warning("Remote logout failed, clearing local session anyway: %s", e)
        finally:
            await self._end_session()

    async def init(self, user: SessionUser) -> None:
        """Bind the session to user: feed identity, push connection, permissions."""
        if self._user is not None and self._user.id != user.id:
            await self._end_session()
        self._user = user
        self._feed.set_user(user.id)
        await self._open_push()
        await self._resolver.load(user)

    async def teardown(self) -> None:
        """Release the push connection and clear in-memory session state.

        The cached permissions survive, so the next start renders from them.
        """
        resources, self._resources = self._resources, None
        if resources is not None:
            await resources.aclose()
        self._resolver.reset()
        self._feed.clear()
        self._feed.set_user(None)
        self._tracker.clear()
        self._user = None

    async def _end_session(self) -> None:
        await self.teardown()
        self._resolver.clear()

    def record_container_action(self, action: str, container_name: str) -> None:
        """Remember a mutating container action issued from this client."""
        self._tracker.track(action, container_name)

    async def _on_push_event(self, event: PushEvent) -> None:
        await self._feed.ingest(event)

    async def _open_push(self) -> None:
        if self._push_source is None or self._resources is not None:
            return
        stack = AsyncExitStack()
        try:
            await stack.enter_async_context(
                push_connection(self._push_source, self._on_push_event)
            )
        except DockDashError as e:
            logger.warning("Push connection unavailable: %s", e)
            await stack.aclose()
            return
        self._resources = stack
