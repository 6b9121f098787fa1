"""Role service port - role and permission CRUD on the backend."""

from typing import Protocol

from dockdash.application.dto.permission_dto import PermissionSnapshot, RoleCreateInput
from dockdash.domain.entities import Role
from dockdash.domain.value_objects import PermissionTree


class RoleService(Protocol):
    """Port for role persistence."""

    async def get_my_permissions(self) -> PermissionSnapshot | None: ...

    async def list_roles(self) -> list[Role]: ...

    async def get_role(self, name: str) -> Role | None: ...

    async def create_role(self, role: RoleCreateInput) -> Role: ...

    async def update_role(
        self, name: str, display_name: str | None, description: str | None
    ) -> Role: ...

    async def update_role_permissions(
        self, name: str, permissions: PermissionTree
    ) -> Role: ...

    async def delete_role(self, name: str) -> None: ...
