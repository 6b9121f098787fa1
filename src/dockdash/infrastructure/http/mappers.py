"""JSON <-> domain mappers for the dashboard backend's camelCase payloads."""

import logging
import re
from datetime import datetime
from typing import Any

from dockdash.application.dto.notification_dto import NotificationCreateInput
from dockdash.application.dto.permission_dto import PermissionSnapshot, RoleCreateInput
from dockdash.application.dto.push_event import parse_timestamp
from dockdash.domain.entities import Notification, Role, SessionUser
from dockdash.domain.exceptions import ServiceUnavailable
from dockdash.domain.value_objects import NotificationType, PermissionTree

logger = logging.getLogger(__name__)

_COUNT_RE = re.compile(r"^\s*(\d+)")


def _id_of(data: dict[str, Any]) -> str | None:
    for key in ("id", "_id", "userId"):
        value = data.get(key)
        if value:
            return str(value)
    return None


def _optional_str(value: Any) -> str | None:
    return str(value) if value is not None else None


def user_from_json(body: Any) -> SessionUser | None:
    """Extract the user from ``{data: {user}}``, ``{user}`` or a bare user object."""
    if not isinstance(body, dict):
        return None
    data = body.get("data")
    if isinstance(data, dict) and isinstance(data.get("user"), dict):
        candidate = data["user"]
    elif isinstance(body.get("user"), dict):
        candidate = body["user"]
    else:
        candidate = body
    user_id = _id_of(candidate)
    if not user_id:
        return None
    return SessionUser(
        id=user_id,
        email=candidate.get("email"),
        name=candidate.get("name"),
        role=candidate.get("role"),
    )


def tree_from_json(data: Any) -> PermissionTree:
    """Build a tree from a backend reply.

    Leaves of an unsupported shape are dropped with a warning and read as
    not granted; only a non-mapping root is a malformed reply.
    """
    dropped: list[str] = []
    try:
        tree = PermissionTree.from_dict(data, dropped=dropped)
    except ValueError as e:
        raise ServiceUnavailable(f"Malformed permission tree: {e}") from e
    if dropped:
        logger.warning("Ignoring unsupported permission values at: %s", ", ".join(dropped))
    return tree


def snapshot_from_json(body: dict[str, Any]) -> PermissionSnapshot | None:
    """``{data: {role, permissions}}``; None when the backend returned nothing usable."""
    data = body.get("data")
    if not isinstance(data, dict) or not data.get("permissions") or not data.get("role"):
        return None
    return PermissionSnapshot(
        role=str(data["role"]),
        permissions=tree_from_json(data["permissions"]),
    )


def role_from_json(data: dict[str, Any]) -> Role:
    return Role(
        name=str(data["name"]),
        display_name=str(data.get("displayName") or data["name"]),
        description=data.get("description") or "",
        is_system_role=bool(data.get("isSystemRole", False)),
        permissions=tree_from_json(data.get("permissions")),
    )


def role_to_json(data: RoleCreateInput) -> dict[str, Any]:
    body: dict[str, Any] = {
        "name": data.name,
        "displayName": data.display_name,
        "description": data.description,
    }
    if data.permissions is not None:
        body["permissions"] = data.permissions.to_dict()
    return body


def _optional_datetime(value: Any) -> datetime | None:
    return parse_timestamp(value) if value else None


def notification_from_json(data: dict[str, Any]) -> Notification:
    notification_id = _id_of(data)
    if not notification_id:
        raise ServiceUnavailable("Notification without id in response")
    return Notification(
        id=notification_id,
        type=NotificationType.parse(data.get("type")),
        message=data.get("message") or "",
        created_at=parse_timestamp(data.get("createdAt")),
        category=data.get("category"),
        action=data.get("action"),
        container_id=data.get("containerId"),
        container_name=data.get("containerName"),
        action_by=data.get("actionBy"),
        action_by_user_id=_optional_str(data.get("actionByUserId")),
        recommendation=data.get("recommendation"),
        is_read=bool(data.get("isRead", False)),
        read_at=_optional_datetime(data.get("readAt")),
    )


def notification_to_json(data: NotificationCreateInput) -> dict[str, Any]:
    body = {
        "message": data.message,
        "type": str(data.type),
        "category": data.category,
        "action": data.action,
        "containerId": data.container_id,
        "containerName": data.container_name,
        "actionBy": data.action_by,
        "actionByUserId": data.action_by_user_id,
        "recommendation": data.recommendation,
    }
    return {k: v for k, v in body.items() if v is not None}


def count_from_json(body: dict[str, Any]) -> int:
    """Affected-row count; the backend reports it in ``count`` or the message text."""
    count = body.get("count")
    if isinstance(count, int):
        return count
    match = _COUNT_RE.match(str(body.get("message") or ""))
    return int(match.group(1)) if match else 0
