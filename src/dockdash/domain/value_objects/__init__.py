"""Domain value objects."""

from dockdash.domain.value_objects.notification_type import NotificationType
from dockdash.domain.value_objects.permission_tree import (
    NOT_FOUND,
    NodeKind,
    PermissionTree,
    node_kind,
)
from dockdash.domain.value_objects.session_state import ResolverState

__all__ = [
    "NOT_FOUND",
    "NodeKind",
    "NotificationType",
    "PermissionTree",
    "ResolverState",
    "node_kind",
]
