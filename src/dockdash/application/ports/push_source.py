"""Push source port - persistent connection emitting named events."""

from collections.abc import Awaitable, Callable
from typing import Protocol

from dockdash.application.dto.push_event import PushEvent

PushEventHandler = Callable[[PushEvent], Awaitable[None]]


class PushEventSource(Protocol):
    """Port for the server push connection."""

    @property
    def connected(self) -> bool: ...

    def subscribe(self, handler: PushEventHandler) -> None: ...

    def unsubscribe(self, handler: PushEventHandler) -> None: ...

    async def connect(self) -> None: ...

    async def disconnect(self) -> None: ...
