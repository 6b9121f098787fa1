"""Role entity for RBAC."""

from dataclasses import dataclass, field

from dockdash.domain.value_objects import PermissionTree


@dataclass
class Role:
    """Role - named bundle of permissions; system roles cannot be deleted."""

    name: str
    display_name: str
    description: str = ""
    is_system_role: bool = False
    permissions: PermissionTree = field(default_factory=PermissionTree)
