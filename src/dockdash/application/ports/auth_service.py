"""Auth service port - cookie-session authentication against the backend."""

from typing import Protocol

from dockdash.domain.entities import SessionUser


class AuthService(Protocol):
    """Port for logging in and out and resolving the current user."""

    async def login(self, email: str, password: str) -> SessionUser: ...

    async def current_user(self) -> SessionUser | None: ...

    async def logout(self) -> None: ...
