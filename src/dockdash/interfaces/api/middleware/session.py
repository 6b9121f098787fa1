"""Session middleware - exposes the dashboard session user on the request."""

import falcon.asgi

from dockdash.application.use_cases.session.dashboard_session import DashboardSession


class SessionMiddleware:
    """Sets req.context.user from the process-scoped dashboard session."""

    def __init__(self, session: DashboardSession) -> None:
        self._session = session

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        req.context.user = self._session.user
