"""Application ports - interfaces for external adapters."""

from dockdash.application.ports.auth_service import AuthService
from dockdash.application.ports.local_storage import LocalStorage
from dockdash.application.ports.notification_store import NotificationStore
from dockdash.application.ports.push_source import PushEventHandler, PushEventSource
from dockdash.application.ports.role_service import RoleService

__all__ = [
    "AuthService",
    "LocalStorage",
    "NotificationStore",
    "PushEventHandler",
    "PushEventSource",
    "RoleService",
]
