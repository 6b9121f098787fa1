"""Unit tests for DashboardApiClient and the HTTP adapters, against httpx.MockTransport."""

import json

import httpx
import pytest

from dockdash.application.dto.notification_dto import NotificationCreateInput
from dockdash.domain.exceptions import (
    DockDashError,
    NotFound,
    PermissionDenied,
    ServiceUnavailable,
    Unauthorized,
    ValidationError,
)
from dockdash.domain.value_objects import PermissionTree
from dockdash.infrastructure.http.api_client import DashboardApiClient
from dockdash.infrastructure.http.auth_service import HttpAuthService
from dockdash.infrastructure.http.notification_store import HttpNotificationStore
from dockdash.infrastructure.http.role_service import HttpRoleService


def _client(handler) -> DashboardApiClient:
    return DashboardApiClient("http://backend.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_refreshes_once_on_401_and_retries() -> None:
    calls: list[str] = []
    state = {"refreshed": False}

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        if request.url.path == "/api/auth/refresh":
            state["refreshed"] = True
            return httpx.Response(200, json={"success": True})
        if not state["refreshed"]:
            return httpx.Response(401, json={"success": False, "message": "expired"})
        return httpx.Response(200, json={"success": True, "data": []})

    async with _client(handler) as client:
        body = await client.get("/api/roles")

    assert body == {"success": True, "data": []}
    assert calls == ["/api/roles", "/api/auth/refresh", "/api/roles"]


@pytest.mark.asyncio
async def test_failed_refresh_raises_unauthorized() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"success": False, "message": "expired"})

    async with _client(handler) as client:
        with pytest.raises(Unauthorized):
            await client.get("/api/roles")


@pytest.mark.asyncio
async def test_login_401_is_not_refreshed() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(401, json={"success": False, "message": "Invalid credentials"})

    async with _client(handler) as client:
        with pytest.raises(Unauthorized, match="Invalid credentials"):
            await client.post("/api/auth/login", {"email": "a", "password": "b"})

    assert calls == ["/api/auth/login"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,exc_type",
    [
        (403, PermissionDenied),
        (404, NotFound),
        (400, ValidationError),
        (409, ValidationError),
        (500, ServiceUnavailable),
        (503, ServiceUnavailable),
        (418, DockDashError),
    ],
)
async def test_error_status_mapping(status: int, exc_type: type) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"success": False, "message": "nope"})

    async with _client(handler) as client:
        with pytest.raises(exc_type, match="nope"):
            await client.get("/api/anything")


@pytest.mark.asyncio
async def test_success_false_envelope_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "message": "Role exists"})

    async with _client(handler) as client:
        with pytest.raises(DockDashError, match="Role exists"):
            await client.post("/api/roles", {})


@pytest.mark.asyncio
async def test_invalid_json_is_service_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    async with _client(handler) as client:
        with pytest.raises(ServiceUnavailable):
            await client.get("/api/roles")


@pytest.mark.asyncio
async def test_empty_body_is_empty_envelope() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    async with _client(handler) as client:
        assert await client.delete("/api/notifications/n1") == {}


@pytest.mark.asyncio
async def test_transport_error_is_service_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(ServiceUnavailable):
            await client.get("/api/roles")


@pytest.mark.asyncio
async def test_session_headers_carry_cookies() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"success": True, "data": {"user": {"id": "u1"}}},
            headers={"Set-Cookie": "accessToken=abc; Path=/"},
        )

    async with _client(handler) as client:
        assert client.session_headers() == {}
        await HttpAuthService(client).login("a@example.com", "pw")
        assert client.session_headers() == {"Cookie": "accessToken=abc"}


# --- adapters ---


@pytest.mark.asyncio
async def test_auth_current_user_shapes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"_id": "u9", "email": "z@example.com", "role": "viewer"})

    async with _client(handler) as client:
        user = await HttpAuthService(client).current_user()

    assert user.id == "u9"
    assert user.role == "viewer"


@pytest.mark.asyncio
async def test_role_service_my_permissions() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/roles/my-permissions"
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": {"role": "editor", "permissions": {"dashboard": {"canView": True}}},
            },
        )

    async with _client(handler) as client:
        snapshot = await HttpRoleService(client).get_my_permissions()

    assert snapshot.role == "editor"
    assert snapshot.permissions.get("dashboard.canView") is True


@pytest.mark.asyncio
async def test_role_service_missing_role_is_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"success": False, "message": "Role not found"})

    async with _client(handler) as client:
        assert await HttpRoleService(client).get_role("ghost") is None


@pytest.mark.asyncio
async def test_role_permissions_update_sends_whole_tree() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": {
                    "name": "editor",
                    "displayName": "Editor",
                    "permissions": seen["body"]["permissions"],
                },
            },
        )

    tree = PermissionTree.from_dict({"dashboard": {"canView": True, "canViewWidgets": ["a"]}})
    async with _client(handler) as client:
        role = await HttpRoleService(client).update_role_permissions("editor", tree)

    assert seen["method"] == "PUT"
    assert seen["path"] == "/api/roles/editor/permissions"
    assert seen["body"] == {"permissions": {"dashboard": {"canView": True, "canViewWidgets": ["a"]}}}
    assert role.permissions == tree


@pytest.mark.asyncio
async def test_notification_store_create_and_counts() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            body = json.loads(request.content)
            assert body == {
                "message": "Container web-1 stopped",
                "type": "info",
                "action": "stop",
                "containerName": "web-1",
            }
            return httpx.Response(
                201,
                json={
                    "success": True,
                    "data": {
                        "_id": "n1",
                        **body,
                        "actionByUserId": "u1",
                        "createdAt": "2024-05-01T10:00:00Z",
                    },
                },
            )
        if request.url.path == "/api/notifications/old/cleanup":
            assert request.url.params["daysOld"] == "7"
            return httpx.Response(200, json={"success": True, "message": "3 old notifications deleted"})
        return httpx.Response(200, json={"success": True, "message": "5 notifications marked as read"})

    async with _client(handler) as client:
        store = HttpNotificationStore(client)
        created = await store.create(
            NotificationCreateInput(
                message="Container web-1 stopped", action="stop", container_name="web-1"
            )
        )
        marked = await store.mark_all_as_read()
        deleted = await store.delete_old_read(7)

    assert created.id == "n1"
    assert created.action_by_user_id == "u1"
    assert created.created_at.year == 2024
    assert marked == 5
    assert deleted == 3
