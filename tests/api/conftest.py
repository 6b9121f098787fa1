"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from dockdash.application.use_cases.notification.action_tracker import (
    SessionActionTracker,
)
from dockdash.application.use_cases.notification.notification_feed import (
    NotificationFeed,
)
from dockdash.application.use_cases.role.create_role import CreateRoleUseCase
from dockdash.application.use_cases.role.delete_role import DeleteRoleUseCase
from dockdash.application.use_cases.role.role_catalog import RoleCatalog
from dockdash.application.use_cases.role.update_role import UpdateRoleUseCase
from dockdash.application.use_cases.role.update_role_permission import (
    UpdateRolePermissionUseCase,
)
from dockdash.application.use_cases.session.dashboard_session import DashboardSession
from dockdash.application.use_cases.session.permission_resolver import (
    PermissionResolver,
)
from dockdash.domain.entities import Role, SessionUser
from dockdash.domain.value_objects import PermissionTree
from dockdash.infrastructure.storage.json_file_storage import MemoryStorage
from dockdash.interfaces.api.app import Resources, create_app
from dockdash.interfaces.api.middleware.cors import CORSMiddleware
from dockdash.interfaces.api.middleware.session import SessionMiddleware
from dockdash.interfaces.api.resources.health import HealthResource
from dockdash.interfaces.api.resources.notifications import (
    FeedResource,
    HistoryResource,
    NotificationReadResource,
    NotificationResource,
    NotificationsReadAllResource,
    NotificationsResource,
)
from dockdash.interfaces.api.resources.roles import (
    RolePermissionsResource,
    RoleResource,
    RolesResource,
)
from dockdash.interfaces.api.resources.session import (
    AllowedModelsResource,
    ContainerActionsResource,
    PermissionCheckResource,
    SessionPermissionsResource,
    SessionResource,
    WidgetResource,
)

from tests.conftest import (
    EDITOR_PERMISSIONS,
    FakeAuthService,
    FakeNotificationStore,
    FakeRoleService,
)

ALLOWED_ORIGIN = "http://localhost:5173"
TEST_USER = SessionUser(id="u1", email="alice@example.com", name="Alice", role="editor")


@pytest.fixture
def api_role_service(role_service: FakeRoleService) -> FakeRoleService:
    """Role service with an editable role and a system role."""
    role_service.add_role(
        Role(
            name="editor",
            display_name="Editor",
            permissions=PermissionTree.from_dict(EDITOR_PERMISSIONS),
        )
    )
    role_service.add_role(Role(name="admin", display_name="Admin", is_system_role=True))
    return role_service


@pytest.fixture
def api_store() -> FakeNotificationStore:
    return FakeNotificationStore()


@pytest.fixture
def session(api_role_service, api_store) -> DashboardSession:
    """Dashboard session without a push connection."""
    tracker = SessionActionTracker(60.0)
    feed = NotificationFeed(api_store, tracker)
    resolver = PermissionResolver(
        api_role_service, MemoryStorage(), default_when_unloaded=False
    )
    return DashboardSession(FakeAuthService(TEST_USER), resolver, feed, tracker)


@pytest.fixture
def app(session: DashboardSession, api_role_service: FakeRoleService):
    """Falcon ASGI app with API resources for testing."""
    catalog = RoleCatalog(api_role_service)
    resources = Resources(
        health=HealthResource(session),
        session=SessionResource(session),
        session_permissions=SessionPermissionsResource(session),
        permission_check=PermissionCheckResource(session),
        widget=WidgetResource(session),
        allowed_models=AllowedModelsResource(session),
        container_actions=ContainerActionsResource(session),
        feed=FeedResource(session.feed),
        history=HistoryResource(session.feed),
        notification_read=NotificationReadResource(session.feed),
        notifications_read_all=NotificationsReadAllResource(session.feed),
        notification=NotificationResource(session.feed),
        notifications=NotificationsResource(session.feed),
        roles=RolesResource(catalog, CreateRoleUseCase(api_role_service, catalog)),
        role=RoleResource(
            catalog,
            UpdateRoleUseCase(api_role_service, catalog),
            DeleteRoleUseCase(api_role_service, catalog),
        ),
        role_permissions=RolePermissionsResource(
            UpdateRolePermissionUseCase(api_role_service, catalog)
        ),
    )
    return create_app(
        resources,
        middleware=[CORSMiddleware([ALLOWED_ORIGIN]), SessionMiddleware(session)],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def logged_in(client: TestClient) -> TestClient:
    """Client whose session has logged in as TEST_USER."""
    result = client.simulate_post(
        "/v1/session", json={"email": TEST_USER.email, "password": "secret"}
    )
    assert result.status_code == 201
    return client
