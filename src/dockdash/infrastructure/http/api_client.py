"""Dashboard backend HTTP client - cookie session, token refresh, envelope unwrapping."""

import asyncio
import logging
from typing import Any

import httpx

from dockdash.domain.exceptions import (
    DockDashError,
    NotFound,
    PermissionDenied,
    ServiceUnavailable,
    Unauthorized,
    ValidationError,
)

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/auth/login"
REFRESH_PATH = "/api/auth/refresh"
_NO_REFRESH_PATHS = frozenset({LOGIN_PATH, REFRESH_PATH})


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if message:
            return str(message)
    return f"HTTP {response.status_code}: {response.reason_phrase}"


class DashboardApiClient:
    """Thin async wrapper over httpx for the dashboard backend.

    Cookies set by the backend (access and refresh tokens) persist on the
    underlying client. A 401 triggers one refresh and one retry; if refresh
    fails the session is over and :class:`Unauthorized` is raised.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )
        self._refresh_lock = asyncio.Lock()

    async def __aenter__(self) -> "DashboardApiClient":
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def session_headers(self) -> dict[str, str]:
        """Cookie header carrying the current session, for the push handshake."""
        cookies = "; ".join(f"{c.name}={c.value}" for c in self._client.cookies.jar)
        return {"Cookie": cookies} if cookies else {}

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send request and return the decoded JSON envelope."""
        response = await self._send(method, path, json=json, params=params)
        if response.status_code == 401 and path not in _NO_REFRESH_PATHS:
            if not await self._refresh():
                raise Unauthorized("Session expired. Please log in again.")
            response = await self._send(method, path, json=json, params=params)
        return self._unwrap(response)

    async def get(self, path: str, **params: Any) -> dict[str, Any]:
        return await self.request("GET", path, params=params or None)

    async def post(self, path: str, body: Any = None) -> dict[str, Any]:
        return await self.request("POST", path, json=body)

    async def put(self, path: str, body: Any = None) -> dict[str, Any]:
        return await self.request("PUT", path, json=body)

    async def patch(self, path: str, body: Any = None) -> dict[str, Any]:
        return await self.request("PATCH", path, json=body)

    async def delete(self, path: str, **params: Any) -> dict[str, Any]:
        return await self.request("DELETE", path, params=params or None)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            raise ServiceUnavailable(f"{method} {path} failed: {e}") from e

    async def _refresh(self) -> bool:
        async with self._refresh_lock:
            try:
                response = await self._send("POST", REFRESH_PATH)
            except ServiceUnavailable as e:
                logger.warning("Session refresh failed: %s", e)
                return False
            if response.is_success:
                logger.debug("Session refreshed")
                return True
            logger.info("Session refresh rejected with HTTP %s", response.status_code)
            return False

    @staticmethod
    def _unwrap(response: httpx.Response) -> dict[str, Any]:
        status = response.status_code
        if status >= 400:
            message = _error_message(response)
            if status == 401:
                raise Unauthorized(message)
            if status == 403:
                raise PermissionDenied(message)
            if status == 404:
                raise NotFound(message)
            if status in (400, 409, 422):
                raise ValidationError(message)
            if status >= 500:
                raise ServiceUnavailable(message)
            raise DockDashError(message)

        if status == 204 or not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise ServiceUnavailable(f"Invalid JSON from {response.request.url}") from e
        if not isinstance(body, dict):
            raise ServiceUnavailable(f"Unexpected response shape from {response.request.url}")
        if body.get("success") is False:
            raise DockDashError(str(body.get("message") or "Request failed"))
        return body
