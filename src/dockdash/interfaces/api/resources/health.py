"""Health check endpoints."""

import falcon.asgi

from dockdash.application.use_cases.session.dashboard_session import DashboardSession


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, session: DashboardSession | None = None) -> None:
        self._session = session

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness with session and push state."""
        media = {"status": "ready"}
        if self._session is not None:
            media["authenticated"] = self._session.user is not None
            media["push_connected"] = self._session.push_connected
            media["permissions"] = str(self._session.resolver.state)
        resp.media = media
        resp.status = falcon.HTTP_200
