"""Application entry point and composition root."""

import logging

import falcon.asgi

from dockdash import __version__
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
from dockdash.config import Settings, get_settings
from dockdash.infrastructure.http.api_client import DashboardApiClient
from dockdash.infrastructure.http.auth_service import HttpAuthService
from dockdash.infrastructure.http.notification_store import HttpNotificationStore
from dockdash.infrastructure.http.role_service import HttpRoleService
from dockdash.infrastructure.push.socketio_source import SocketIOPushSource
from dockdash.infrastructure.storage.json_file_storage import JsonFileStorage
from dockdash.interfaces.api.app import Resources, create_app
from dockdash.interfaces.api.middleware.cors import CORSMiddleware
from dockdash.interfaces.api.middleware.lifespan import SessionLifespanMiddleware
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
from dockdash.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"dockdash v{__version__}")


def build_session(
    settings: Settings, api_client: DashboardApiClient, role_service: HttpRoleService
) -> DashboardSession:
    """Wire the session object and everything it owns."""
    tracker = SessionActionTracker(settings.action_suppression_seconds)
    feed = NotificationFeed(
        HttpNotificationStore(api_client), tracker, limit=settings.feed_limit
    )
    resolver = PermissionResolver(
        role_service,
        JsonFileStorage(settings.storage_path),
        default_when_unloaded=settings.default_when_unloaded,
        fallback_full_access=settings.fallback_full_access,
    )
    push_source = (
        SocketIOPushSource(settings.ws_url, headers_factory=api_client.session_headers)
        if settings.push_enabled
        else None
    )
    return DashboardSession(
        HttpAuthService(api_client), resolver, feed, tracker, push_source
    )


def create_dockdash_app(settings: Settings | None = None) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, debug=settings.debug)

    api_client = DashboardApiClient(settings.api_base_url, timeout=settings.request_timeout)
    role_service = HttpRoleService(api_client)
    session = build_session(settings, api_client, role_service)

    catalog = RoleCatalog(role_service)
    create_role = CreateRoleUseCase(role_service, catalog)
    update_role = UpdateRoleUseCase(role_service, catalog)
    delete_role = DeleteRoleUseCase(role_service, catalog)
    update_permission = UpdateRolePermissionUseCase(role_service, catalog)

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
        roles=RolesResource(catalog, create_role),
        role=RoleResource(catalog, update_role, delete_role),
        role_permissions=RolePermissionsResource(update_permission),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    logger.info(
        "dockdash v%s (%s) against %s", __version__, settings.environment, settings.api_base_url
    )
    return create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            SessionLifespanMiddleware(session, api_client),
            SessionMiddleware(session),
        ],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_dockdash_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run_server()
