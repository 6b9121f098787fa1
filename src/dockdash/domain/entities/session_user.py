"""Authenticated dashboard user."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionUser:
    """User returned by the backend auth endpoints."""

    id: str
    email: str | None = None
    name: str | None = None
    role: str | None = None
