"""Update role permission use case - copy-on-write edit of one permission path."""

import logging
from typing import Any

from dockdash.application.ports import RoleService
from dockdash.application.use_cases.role.role_catalog import RoleCatalog
from dockdash.domain.entities import Role
from dockdash.domain.exceptions import DockDashError, NotFound, ValidationError

logger = logging.getLogger(__name__)


class UpdateRolePermissionUseCase:
    """Set one leaf of a role's permission tree and submit the whole tree."""

    def __init__(self, role_service: RoleService, catalog: RoleCatalog) -> None:
        self._role_service = role_service
        self._catalog = catalog

    async def execute(self, role_name: str, path: str, value: Any) -> Role:
        """Submit the edited tree; the cached role changes only once accepted.

        On rejection the edit is discarded, the role is re-fetched, and the
        error propagates to the caller.
        """
        role = await self._catalog.get(role_name)
        if role is None:
            raise NotFound(f"Role {role_name!r} not found")

        try:
            edited = role.permissions.with_value(path, value)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        try:
            saved = await self._role_service.update_role_permissions(role_name, edited)
        except DockDashError as e:
            logger.warning("Permission update for role %s rejected: %s", role_name, e)
            await self._catalog.reload(role_name)
            raise

        self._catalog.put(saved)
        return saved
