"""HTTP role service - /api/roles endpoints."""

from typing import Any
from urllib.parse import quote

from dockdash.application.dto.permission_dto import PermissionSnapshot, RoleCreateInput
from dockdash.domain.entities import Role
from dockdash.domain.exceptions import NotFound, ServiceUnavailable
from dockdash.domain.value_objects import PermissionTree
from dockdash.infrastructure.http.api_client import DashboardApiClient
from dockdash.infrastructure.http.mappers import (
    role_from_json,
    role_to_json,
    snapshot_from_json,
)

ROLES_PATH = "/api/roles"


def _role_path(name: str) -> str:
    return f"{ROLES_PATH}/{quote(name, safe='')}"


def _role_data(body: dict[str, Any]) -> dict[str, Any]:
    data = body.get("data")
    if not isinstance(data, dict):
        raise ServiceUnavailable("Role missing from response")
    return data


class HttpRoleService:
    """Role service implementation."""

    def __init__(self, client: DashboardApiClient) -> None:
        self._client = client

    async def get_my_permissions(self) -> PermissionSnapshot | None:
        body = await self._client.get(f"{ROLES_PATH}/my-permissions")
        return snapshot_from_json(body)

    async def list_roles(self) -> list[Role]:
        body = await self._client.get(ROLES_PATH)
        return [role_from_json(r) for r in body.get("data") or []]

    async def get_role(self, name: str) -> Role | None:
        try:
            body = await self._client.get(_role_path(name))
        except NotFound:
            return None
        return role_from_json(_role_data(body))

    async def create_role(self, role: RoleCreateInput) -> Role:
        body = await self._client.post(ROLES_PATH, role_to_json(role))
        return role_from_json(_role_data(body))

    async def update_role(
        self, name: str, display_name: str | None, description: str | None
    ) -> Role:
        payload: dict[str, Any] = {}
        if display_name is not None:
            payload["displayName"] = display_name
        if description is not None:
            payload["description"] = description
        body = await self._client.put(_role_path(name), payload)
        return role_from_json(_role_data(body))

    async def update_role_permissions(self, name: str, permissions: PermissionTree) -> Role:
        body = await self._client.put(
            f"{_role_path(name)}/permissions", {"permissions": permissions.to_dict()}
        )
        return role_from_json(_role_data(body))

    async def delete_role(self, name: str) -> None:
        await self._client.delete(_role_path(name))
