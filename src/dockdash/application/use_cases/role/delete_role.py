"""Delete role use case."""

from dockdash.application.ports import RoleService
from dockdash.application.use_cases.role.role_catalog import RoleCatalog
from dockdash.domain.exceptions import NotFound, SystemRoleProtected


class DeleteRoleUseCase:
    """Delete a non-system role."""

    def __init__(self, role_service: RoleService, catalog: RoleCatalog) -> None:
        self._role_service = role_service
        self._catalog = catalog

    async def execute(self, role_name: str) -> None:
        """Delete role. System roles are refused before any remote call."""
        role = await self._catalog.get(role_name)
        if role is None:
            raise NotFound(f"Role {role_name!r} not found")
        if role.is_system_role:
            raise SystemRoleProtected(f"Cannot delete system role {role_name!r}")

        await self._role_service.delete_role(role_name)
        self._catalog.discard(role_name)
