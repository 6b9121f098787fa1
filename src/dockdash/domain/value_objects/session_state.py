"""Permission resolution lifecycle states."""

from enum import StrEnum


class ResolverState(StrEnum):
    """State of the session permission resolver."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
