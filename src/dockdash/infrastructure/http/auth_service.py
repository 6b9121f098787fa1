"""HTTP auth service - /api/auth endpoints."""

from dockdash.domain.entities import SessionUser
from dockdash.domain.exceptions import NotFound, ServiceUnavailable
from dockdash.infrastructure.http.api_client import LOGIN_PATH, DashboardApiClient
from dockdash.infrastructure.http.mappers import user_from_json


class HttpAuthService:
    """Auth service implementation."""

    def __init__(self, client: DashboardApiClient) -> None:
        self._client = client

    async def login(self, email: str, password: str) -> SessionUser:
        """Log in; raises Unauthorized on bad credentials."""
        body = await self._client.post(LOGIN_PATH, {"email": email, "password": password})
        user = user_from_json(body)
        if user is None:
            raise ServiceUnavailable("Login failed: invalid response from server")
        return user

    async def current_user(self) -> SessionUser | None:
        """Who am I. None when the backend knows no user for this session."""
        try:
            body = await self._client.get("/api/auth/me")
        except NotFound:
            return None
        return user_from_json(body)

    async def logout(self) -> None:
        await self._client.post("/api/auth/logout")
