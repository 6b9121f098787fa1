"""Pytest fixtures for dockdash tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from dockdash.application.dto.notification_dto import (
    NotificationCreateInput,
    NotificationPage,
)
from dockdash.application.dto.permission_dto import PermissionSnapshot, RoleCreateInput
from dockdash.application.dto.push_event import PushEvent
from dockdash.application.use_cases.notification.action_tracker import (
    SessionActionTracker,
)
from dockdash.domain.entities import Notification, Role, SessionUser
from dockdash.domain.exceptions import (
    DockDashError,
    NotFound,
    ServiceUnavailable,
    Unauthorized,
    ValidationError,
)
from dockdash.domain.value_objects import PermissionTree
from dockdash.infrastructure.storage.json_file_storage import MemoryStorage

EDITOR_PERMISSIONS = {
    "dashboard": {
        "canView": True,
        "canViewWidgets": ["containerStatus", "systemHealth"],
    },
    "dockerMonitor": {
        "canView": True,
        "containers": {"canView": True, "canStop": False},
    },
    "aiChat": {"canView": True, "allowedModels": ["gpt-4o"]},
}


# --- Fake services ---


class FakeRoleService:
    """In-memory role service."""

    def __init__(self) -> None:
        self._roles: dict[str, Role] = {}
        self.snapshot: PermissionSnapshot | None = None
        self.permissions_error: DockDashError | None = None
        self.update_error: DockDashError | None = None
        self.calls: list[str] = []

    def add_role(self, role: Role) -> None:
        """Helper to add role for tests."""
        self._roles[role.name] = role

    async def get_my_permissions(self) -> PermissionSnapshot | None:
        self.calls.append("get_my_permissions")
        if self.permissions_error is not None:
            raise self.permissions_error
        return self.snapshot

    async def list_roles(self) -> list[Role]:
        self.calls.append("list_roles")
        return list(self._roles.values())

    async def get_role(self, name: str) -> Role | None:
        self.calls.append(f"get_role:{name}")
        return self._roles.get(name)

    async def create_role(self, role: RoleCreateInput) -> Role:
        self.calls.append(f"create_role:{role.name}")
        if role.name in self._roles:
            raise ValidationError(f"Role {role.name} already exists")
        created = Role(
            name=role.name,
            display_name=role.display_name,
            description=role.description,
            permissions=role.permissions or PermissionTree(),
        )
        self._roles[created.name] = created
        return created

    async def update_role(
        self, name: str, display_name: str | None, description: str | None
    ) -> Role:
        self.calls.append(f"update_role:{name}")
        role = self._roles.get(name)
        if role is None:
            raise NotFound("Role not found")
        updated = replace(
            role,
            display_name=display_name if display_name is not None else role.display_name,
            description=description if description is not None else role.description,
        )
        self._roles[name] = updated
        return updated

    async def update_role_permissions(self, name: str, permissions: PermissionTree) -> Role:
        self.calls.append(f"update_role_permissions:{name}")
        if self.update_error is not None:
            raise self.update_error
        role = self._roles.get(name)
        if role is None:
            raise NotFound("Role not found")
        updated = replace(role, permissions=permissions)
        self._roles[name] = updated
        return updated

    async def delete_role(self, name: str) -> None:
        self.calls.append(f"delete_role:{name}")
        self._roles.pop(name, None)


class FakeNotificationStore:
    """In-memory notification store; assigns ids like the backend does."""

    def __init__(self, action_by_user_id: str | None = None) -> None:
        self._by_id: dict[str, Notification] = {}
        self._next_id = 1
        self.action_by_user_id = action_by_user_id
        self.fail_with: DockDashError | None = None
        self.created: list[NotificationCreateInput] = []
        self.calls: list[str] = []

    def _check(self, call: str) -> None:
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    async def list(
        self, *, limit: int = 50, skip: int = 0, unread_only: bool = False
    ) -> NotificationPage:
        self._check("list")
        items = sorted(self._by_id.values(), key=lambda n: n.created_at, reverse=True)
        unread = [n for n in items if not n.is_read]
        if unread_only:
            items = unread
        return NotificationPage(
            items=items[skip : skip + limit],
            unread_count=len(unread),
            total=len(items),
        )

    async def create(self, data: NotificationCreateInput) -> Notification:
        self._check("create")
        self.created.append(data)
        notification = Notification(
            id=f"n{self._next_id}",
            type=data.type,
            message=data.message,
            created_at=datetime.now(UTC),
            category=data.category,
            action=data.action,
            container_id=data.container_id,
            container_name=data.container_name,
            action_by_user_id=self.action_by_user_id,
        )
        self._next_id += 1
        self._by_id[notification.id] = notification
        return notification

    async def mark_as_read(self, notification_id: str) -> None:
        self._check(f"mark_as_read:{notification_id}")
        n = self._by_id.get(notification_id)
        if n is None:
            raise NotFound("Notification not found")
        self._by_id[notification_id] = replace(n, is_read=True, read_at=datetime.now(UTC))

    async def mark_all_as_read(self) -> int:
        self._check("mark_all_as_read")
        unread = [n for n in self._by_id.values() if not n.is_read]
        for n in unread:
            self._by_id[n.id] = replace(n, is_read=True, read_at=datetime.now(UTC))
        return len(unread)

    async def delete(self, notification_id: str) -> None:
        self._check(f"delete:{notification_id}")
        self._by_id.pop(notification_id, None)

    async def delete_all(self) -> int:
        self._check("delete_all")
        count = len(self._by_id)
        self._by_id.clear()
        return count

    async def delete_old_read(self, days_old: int = 7) -> int:
        self._check(f"delete_old_read:{days_old}")
        cutoff = datetime.now(UTC) - timedelta(days=days_old)
        old = [n.id for n in self._by_id.values() if n.is_read and n.created_at < cutoff]
        for notification_id in old:
            del self._by_id[notification_id]
        return len(old)

    def add(self, notification: Notification) -> None:
        """Helper to seed stored notifications."""
        self._by_id[notification.id] = notification


class FakeAuthService:
    """Auth service with one known account."""

    def __init__(self, user: SessionUser | None = None, password: str = "secret") -> None:
        self.user = user
        self.password = password
        self.logged_in = user is not None
        self.current_user_error: DockDashError | None = None
        self.logout_error: DockDashError | None = None

    async def login(self, email: str, password: str) -> SessionUser:
        if self.user is None or email != self.user.email or password != self.password:
            raise Unauthorized("Invalid email or password")
        self.logged_in = True
        return self.user

    async def current_user(self) -> SessionUser | None:
        if self.current_user_error is not None:
            raise self.current_user_error
        if not self.logged_in:
            raise Unauthorized("Not authenticated")
        return self.user

    async def logout(self) -> None:
        self.logged_in = False
        if self.logout_error is not None:
            raise self.logout_error


class FakePushSource:
    """Push source that delivers events on demand."""

    def __init__(self, fail_connect: bool = False) -> None:
        self.fail_connect = fail_connect
        self.handlers: list = []
        self._connected = False
        self.connect_calls = 0
        self.disconnect_calls = 0

    @property
    def connected(self) -> bool:
        return self._connected

    def subscribe(self, handler) -> None:
        if handler not in self.handlers:
            self.handlers.append(handler)

    def unsubscribe(self, handler) -> None:
        if handler in self.handlers:
            self.handlers.remove(handler)

    async def connect(self) -> None:
        self.connect_calls += 1
        if self.fail_connect:
            raise ServiceUnavailable("push service down")
        self._connected = True

    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        self._connected = False

    async def emit(self, event: PushEvent) -> None:
        """Deliver event to every subscribed handler."""
        for handler in list(self.handlers):
            await handler(event)


class FakeScheduler:
    """Collects delayed callbacks; tests fire them explicitly."""

    def __init__(self) -> None:
        self.pending: list[tuple[float, object]] = []

    def __call__(self, delay: float, callback) -> None:
        self.pending.append((delay, callback))

    def fire_all(self) -> None:
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# --- Fixtures ---


@pytest.fixture
def user() -> SessionUser:
    return SessionUser(id="u1", email="alice@example.com", name="Alice", role="editor")


@pytest.fixture
def role_service() -> FakeRoleService:
    """Role service answering with the editor tree."""
    service = FakeRoleService()
    service.snapshot = PermissionSnapshot(
        role="editor", permissions=PermissionTree.from_dict(EDITOR_PERMISSIONS)
    )
    return service


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def notification_store() -> FakeNotificationStore:
    return FakeNotificationStore()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracker(scheduler: FakeScheduler, clock: FakeClock) -> SessionActionTracker:
    """Tracker with a 60s window driven by fake scheduler and clock."""
    return SessionActionTracker(60.0, scheduler=scheduler, clock=clock)
