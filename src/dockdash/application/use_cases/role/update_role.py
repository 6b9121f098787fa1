"""Update role details use case."""

from dockdash.application.ports import RoleService
from dockdash.application.use_cases.role.role_catalog import RoleCatalog
from dockdash.domain.entities import Role
from dockdash.domain.exceptions import ValidationError


class UpdateRoleUseCase:
    """Change display name and/or description of a role."""

    def __init__(self, role_service: RoleService, catalog: RoleCatalog) -> None:
        self._role_service = role_service
        self._catalog = catalog

    async def execute(
        self,
        role_name: str,
        display_name: str | None = None,
        description: str | None = None,
    ) -> Role:
        if display_name is not None and not display_name.strip():
            raise ValidationError("Display name is required")
        role = await self._role_service.update_role(
            role_name,
            display_name.strip() if display_name is not None else None,
            description,
        )
        self._catalog.put(role)
        return role
