"""Role API resources - role catalog and hierarchical permission editing."""

import falcon.asgi

from dockdash.application.dto.permission_dto import RoleCreateInput
from dockdash.application.use_cases.role.create_role import CreateRoleUseCase
from dockdash.application.use_cases.role.delete_role import DeleteRoleUseCase
from dockdash.application.use_cases.role.role_catalog import RoleCatalog
from dockdash.application.use_cases.role.update_role import UpdateRoleUseCase
from dockdash.application.use_cases.role.update_role_permission import (
    UpdateRolePermissionUseCase,
)
from dockdash.domain.value_objects import PermissionTree
from dockdash.interfaces.api.resources.session import _require_user
from dockdash.interfaces.api.serializers import role_media


class RolesResource:
    """GET/POST /v1/roles - list and create roles."""

    def __init__(self, catalog: RoleCatalog, create_role: CreateRoleUseCase) -> None:
        self._catalog = catalog
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List roles, reloading from the backend unless ``cached=true``."""
        if not _require_user(req, resp):
            return
        if req.get_param_as_bool("cached") and self._catalog.roles:
            roles = self._catalog.roles
        else:
            roles = await self._catalog.refresh()
        resp.media = {"items": [role_media(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create role."""
        if not _require_user(req, resp):
            return
        try:
            body = await req.get_media()
            name = body["name"]
            display_name = body["display_name"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        permissions = body.get("permissions")
        if permissions is not None:
            try:
                permissions = PermissionTree.from_dict(permissions)
            except ValueError as e:
                resp.status = falcon.HTTP_400
                resp.media = {"error": str(e)}
                return

        role = await self._create.execute(
            RoleCreateInput(
                name=str(name),
                display_name=str(display_name),
                description=str(body.get("description") or ""),
                permissions=permissions,
            )
        )
        resp.media = role_media(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PUT/DELETE /v1/roles/{name}."""

    def __init__(
        self,
        catalog: RoleCatalog,
        update_role: UpdateRoleUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self._catalog = catalog
        self._update = update_role
        self._delete = delete_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        if not _require_user(req, resp):
            return
        role = await self._catalog.get(name)
        if role is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return
        resp.media = role_media(role)
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        """Update display name and description."""
        if not _require_user(req, resp):
            return
        body = await req.get_media()
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Expected a JSON object"}
            return
        display_name = body.get("display_name")
        description = body.get("description")
        for field, value in (("display_name", display_name), ("description", description)):
            if value is not None and not isinstance(value, str):
                resp.status = falcon.HTTP_400
                resp.media = {"error": f"{field} must be a string"}
                return
        role = await self._update.execute(
            name, display_name=display_name, description=description
        )
        resp.media = role_media(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        if not _require_user(req, resp):
            return
        await self._delete.execute(name)
        resp.status = falcon.HTTP_204


class RolePermissionsResource:
    """PUT /v1/roles/{name}/permissions - set one leaf: ``{path, value}``."""

    def __init__(self, update_permission: UpdateRolePermissionUseCase) -> None:
        self._update_permission = update_permission

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        if not _require_user(req, resp):
            return
        try:
            body = await req.get_media()
            path = body["path"]
            value = body["value"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        if not isinstance(path, str):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "path must be a string"}
            return
        role = await self._update_permission.execute(name, path, value)
        resp.media = role_media(role)
        resp.status = falcon.HTTP_200
