"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from dockdash.domain.exceptions import DockDashError
from dockdash.interfaces.api.errors import handle_domain_error
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


@dataclass
class Resources:
    """Every resource the local API routes to."""

    health: HealthResource
    session: SessionResource
    session_permissions: SessionPermissionsResource
    permission_check: PermissionCheckResource
    widget: WidgetResource
    allowed_models: AllowedModelsResource
    container_actions: ContainerActionsResource
    feed: FeedResource
    history: HistoryResource
    notification_read: NotificationReadResource
    notifications_read_all: NotificationsReadAllResource
    notification: NotificationResource
    notifications: NotificationsResource
    roles: RolesResource
    role: RoleResource
    role_permissions: RolePermissionsResource


def create_app(resources: Resources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(DockDashError, handle_domain_error)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")

    app.add_route("/v1/session", resources.session)
    app.add_route("/v1/session/permissions", resources.session_permissions)
    app.add_route("/v1/session/permissions/check", resources.permission_check)
    app.add_route("/v1/session/widgets/{name}", resources.widget)
    app.add_route("/v1/session/models", resources.allowed_models)
    app.add_route("/v1/session/actions", resources.container_actions)

    app.add_route("/v1/notifications", resources.notifications)
    app.add_route("/v1/notifications/feed", resources.feed)
    app.add_route("/v1/notifications/history", resources.history)
    app.add_route("/v1/notifications/read-all", resources.notifications_read_all)
    app.add_route("/v1/notifications/{notification_id}", resources.notification)
    app.add_route("/v1/notifications/{notification_id}/read", resources.notification_read)

    app.add_route("/v1/roles", resources.roles)
    app.add_route("/v1/roles/{name}", resources.role)
    app.add_route("/v1/roles/{name}/permissions", resources.role_permissions)
    return app
