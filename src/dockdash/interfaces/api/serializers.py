"""Response body builders for API resources."""

from typing import Any

from dockdash.application.use_cases.session.permission_resolver import (
    PermissionResolver,
)
from dockdash.domain.entities import Notification, Role, SessionUser


def user_media(user: SessionUser) -> dict[str, Any]:
    return {"id": user.id, "email": user.email, "name": user.name, "role": user.role}


def notification_media(n: Notification) -> dict[str, Any]:
    return {
        "id": n.id,
        "type": str(n.type),
        "category": n.category,
        "action": n.action,
        "message": n.message,
        "container_id": n.container_id,
        "container_name": n.container_name,
        "action_by": n.action_by,
        "action_by_user_id": n.action_by_user_id,
        "value": n.value,
        "threshold": n.threshold,
        "recommendation": n.recommendation,
        "created_at": n.created_at.isoformat(),
        "is_read": n.is_read,
        "read_at": n.read_at.isoformat() if n.read_at else None,
        "is_local": n.is_local,
    }


def role_media(role: Role) -> dict[str, Any]:
    return {
        "name": role.name,
        "display_name": role.display_name,
        "description": role.description,
        "is_system_role": role.is_system_role,
        "permissions": role.permissions.to_dict(),
    }


def permissions_media(resolver: PermissionResolver) -> dict[str, Any]:
    tree = resolver.permissions
    return {
        "state": str(resolver.state),
        "loading": resolver.loading,
        "role": resolver.role,
        "permissions": tree.to_dict() if tree is not None else None,
        "default_when_unloaded": resolver.default_when_unloaded,
    }
