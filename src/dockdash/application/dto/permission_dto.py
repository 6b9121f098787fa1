"""Permission DTOs."""

from dataclasses import dataclass

from dockdash.domain.value_objects import PermissionTree


@dataclass(frozen=True)
class PermissionSnapshot:
    """Role name and permission tree for the current user."""

    role: str
    permissions: PermissionTree


@dataclass
class RoleCreateInput:
    """Input for creating a role."""

    name: str
    display_name: str
    description: str = ""
    permissions: PermissionTree | None = None
