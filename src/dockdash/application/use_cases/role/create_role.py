"""Create role use case."""

import re

from dockdash.application.dto.permission_dto import RoleCreateInput
from dockdash.application.ports import RoleService
from dockdash.application.use_cases.role.role_catalog import RoleCatalog
from dockdash.domain.entities import Role
from dockdash.domain.exceptions import ValidationError

ROLE_NAME_PATTERN = re.compile(r"^[a-z0-9_]+$")


def validate_role_input(data: RoleCreateInput) -> RoleCreateInput:
    """Normalize and check role input before it is submitted."""
    name = data.name.strip().lower()
    if not name:
        raise ValidationError("Role name is required")
    if not ROLE_NAME_PATTERN.match(name):
        raise ValidationError(
            "Role name can only contain lowercase letters, numbers, and underscores"
        )
    display_name = data.display_name.strip()
    if not display_name:
        raise ValidationError("Display name is required")
    return RoleCreateInput(
        name=name,
        display_name=display_name,
        description=data.description,
        permissions=data.permissions,
    )


class CreateRoleUseCase:
    """Validate and create a role."""

    def __init__(self, role_service: RoleService, catalog: RoleCatalog) -> None:
        self._role_service = role_service
        self._catalog = catalog

    async def execute(self, data: RoleCreateInput) -> Role:
        """Create role; raises ValidationError without contacting the backend."""
        role = await self._role_service.create_role(validate_role_input(data))
        self._catalog.put(role)
        return role
