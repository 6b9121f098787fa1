"""Session API resources - login state and permission lookups for the front end."""

import falcon.asgi

from dockdash.application.use_cases.session.dashboard_session import DashboardSession
from dockdash.interfaces.api.serializers import permissions_media, user_media


def _require_user(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> bool:
    if getattr(req.context, "user", None) is None:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
        return False
    return True


class SessionResource:
    """POST/GET/DELETE /v1/session - log in, current user, log out."""

    def __init__(self, session: DashboardSession) -> None:
        self._session = session

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Log in with email and password."""
        try:
            body = await req.get_media()
            email = body["email"]
            password = body["password"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        user = await self._session.login(email, password)
        resp.media = {"user": user_media(user), "role": self._session.resolver.role}
        resp.status = falcon.HTTP_201

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Current user."""
        if not _require_user(req, resp):
            return
        resp.media = {"user": user_media(req.context.user)}
        resp.status = falcon.HTTP_200

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Log out; always clears local state."""
        await self._session.logout()
        resp.status = falcon.HTTP_204


class SessionPermissionsResource:
    """GET /v1/session/permissions - resolver state, role and tree."""

    def __init__(self, session: DashboardSession) -> None:
        self._session = session

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = permissions_media(self._session.resolver)
        resp.status = falcon.HTTP_200


class PermissionCheckResource:
    """POST /v1/session/permissions/check - ``{paths, mode: any|all}``."""

    def __init__(self, session: DashboardSession) -> None:
        self._session = session

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await req.get_media()
        paths = body.get("paths") if isinstance(body, dict) else None
        mode = body.get("mode", "all") if isinstance(body, dict) else "all"
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "paths must be a list of strings"}
            return
        if mode not in ("any", "all"):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "mode must be 'any' or 'all'"}
            return

        resolver = self._session.resolver
        allowed = resolver.has_any(paths) if mode == "any" else resolver.has_all(paths)
        resp.media = {
            "allowed": allowed,
            "results": {p: resolver.has_permission(p) for p in paths},
        }
        resp.status = falcon.HTTP_200


class WidgetResource:
    """GET /v1/session/widgets/{name} - dashboard widget allow-list check."""

    def __init__(self, session: DashboardSession) -> None:
        self._session = session

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        resp.media = {"widget": name, "allowed": self._session.resolver.can_view_widget(name)}
        resp.status = falcon.HTTP_200


class AllowedModelsResource:
    """GET /v1/session/models - allowed AI models; empty list means all."""

    def __init__(self, session: DashboardSession) -> None:
        self._session = session

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {"items": self._session.resolver.allowed_models()}
        resp.status = falcon.HTTP_200


class ContainerActionsResource:
    """POST /v1/session/actions - record an own container action before issuing it."""

    def __init__(self, session: DashboardSession) -> None:
        self._session = session

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not _require_user(req, resp):
            return
        try:
            body = await req.get_media()
            action = body["action"]
            container_name = body["container_name"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        self._session.record_container_action(action, container_name)
        resp.media = {
            "action": action,
            "container_name": container_name,
            "suppressed_for_seconds": self._session.tracker.window_seconds,
        }
        resp.status = falcon.HTTP_202
