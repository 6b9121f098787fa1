"""Role catalog - display/edit cache of roles fetched from the backend."""

import logging

from dockdash.application.ports import RoleService
from dockdash.domain.entities import Role
from dockdash.domain.exceptions import DockDashError

logger = logging.getLogger(__name__)


class RoleCatalog:
    """In-memory role cache. Entries are only replaced with server-accepted roles."""

    def __init__(self, role_service: RoleService) -> None:
        self._role_service = role_service
        self._roles: dict[str, Role] = {}

    @property
    def roles(self) -> list[Role]:
        return list(self._roles.values())

    async def refresh(self) -> list[Role]:
        """Reload all roles from the backend."""
        roles = await self._role_service.list_roles()
        self._roles = {r.name: r for r in roles}
        return self.roles

    async def get(self, name: str) -> Role | None:
        """Cached role, fetched on first access."""
        role = self._roles.get(name)
        if role is None:
            role = await self._role_service.get_role(name)
            if role is not None:
                self._roles[name] = role
        return role

    async def reload(self, name: str) -> Role | None:
        """Drop the cached role and fetch the authoritative copy."""
        self._roles.pop(name, None)
        try:
            return await self.get(name)
        except DockDashError as e:
            logger.error("Failed to reload role %s: %s", name, e)
            return None

    def put(self, role: Role) -> None:
        self._roles[role.name] = role

    def discard(self, name: str) -> None:
        self._roles.pop(name, None)
