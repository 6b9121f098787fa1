"""Local storage port - small client-side key/value store."""

from typing import Protocol


class LocalStorage(Protocol):
    """Port for client-local persisted state. Reads must not block."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, *keys: str) -> None: ...
