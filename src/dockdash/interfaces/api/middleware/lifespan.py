"""Lifespan middleware - resumes the session on startup, releases it on shutdown."""

import logging
from typing import Any

from dockdash.application.use_cases.session.dashboard_session import DashboardSession
from dockdash.infrastructure.http.api_client import DashboardApiClient

logger = logging.getLogger(__name__)


class SessionLifespanMiddleware:
    """Middleware that restores the session when the ASGI server starts and
    tears it down (push connection, HTTP pool) when it stops."""

    def __init__(self, session: DashboardSession, api_client: DashboardApiClient) -> None:
        self._session = session
        self._api_client = api_client

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Resume an existing backend session, if any."""
        user = await self._session.restore()
        if user is not None:
            logger.info("Resumed session for user %s", user.id)

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Release session resources."""
        await self._session.teardown()
        await self._api_client.aclose()
