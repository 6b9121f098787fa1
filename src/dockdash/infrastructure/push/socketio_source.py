"""Socket.IO push source - container events and alerts from the websocket service."""

import logging
from collections.abc import Callable
from typing import Any

import socketio
from socketio.exceptions import ConnectionError as SocketIOConnectionError

from dockdash.application.dto.push_event import DOCKER_ALERT, DOCKER_EVENT, parse_push_event
from dockdash.application.ports import PushEventHandler
from dockdash.domain.exceptions import ServiceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_TRANSPORTS = ("websocket", "polling")


class SocketIOPushSource:
    """Push event source on a python-socketio AsyncClient.

    The client only listens; nothing is emitted beyond the handshake. The
    handshake carries the session cookies so the service can identify the
    user.
    """

    def __init__(
        self,
        url: str,
        *,
        headers_factory: Callable[[], dict[str, str]] | None = None,
        transports: tuple[str, ...] = DEFAULT_TRANSPORTS,
        client: socketio.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._headers_factory = headers_factory
        self._transports = list(transports)
        self._client = client or socketio.AsyncClient(reconnection=True)
        self._handlers: list[PushEventHandler] = []
        self._client.on("connect", self._on_connect)
        self._client.on("disconnect", self._on_disconnect)
        self._client.on("connected", self._on_welcome)
        self._client.on("dockerError", self._on_docker_error)
        self._client.on(DOCKER_EVENT, self._on_docker_event)
        self._client.on(DOCKER_ALERT, self._on_docker_alert)

    @property
    def connected(self) -> bool:
        return bool(self._client.connected)

    def subscribe(self, handler: PushEventHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: PushEventHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    async def connect(self) -> None:
        if self.connected:
            return
        headers = self._headers_factory() if self._headers_factory else {}
        try:
            await self._client.connect(
                self._url, headers=headers, transports=self._transports
            )
        except SocketIOConnectionError as e:
            raise ServiceUnavailable(f"Push connection to {self._url} failed: {e}") from e

    async def disconnect(self) -> None:
        """Release the transport; safe to call when not connected."""
        await self._client.disconnect()

    async def _dispatch(self, name: str, payload: Any) -> None:
        if not isinstance(payload, dict):
            logger.warning("Ignoring %s with non-object payload", name)
            return
        event = parse_push_event(name, payload)
        if event is None:
            return
        for handler in list(self._handlers):
            try:
                await handler(event)
            except Exception:
                logger.exception("Push handler failed for %s", name)

    async def _on_docker_event(self, payload: Any) -> None:
        await self._dispatch(DOCKER_EVENT, payload)

    async def _on_docker_alert(self, payload: Any) -> None:
        await self._dispatch(DOCKER_ALERT, payload)

    async def _on_connect(self) -> None:
        logger.info("Push connection established to %s", self._url)

    async def _on_disconnect(self, *args: Any) -> None:
        logger.info("Push connection closed")

    async def _on_welcome(self, data: Any) -> None:
        logger.debug("Push service greeting: %s", data)

    async def _on_docker_error(self, error: Any) -> None:
        logger.error("Push service reported error: %s", error)
