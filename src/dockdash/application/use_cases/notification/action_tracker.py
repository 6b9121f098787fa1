"""Session action tracker - the current actor's own recent mutating actions."""

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

from dockdash.domain.entities import TrackedAction, action_key

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 60.0

Scheduler = Callable[[float, Callable[[], Any]], Any]


def _loop_scheduler(delay: float, callback: Callable[[], Any]) -> Any:
    return asyncio.get_running_loop().call_later(delay, callback)


class SessionActionTracker:
    """Time-windowed set of (action, resource) keys issued by this client.

    The push source echoes every container action back to all clients; the
    originating client consults this set to absorb its own echo. Removal
    timers are fire-and-forget and never cancelled. Re-tracking a live key
    keeps the first entry and schedules one more removal; whichever removal
    fires first drops the key and the rest are no-ops.
    """

    def __init__(
        self,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        *,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window_seconds
        self._scheduler = scheduler or _loop_scheduler
        self._clock = clock
        self._actions: dict[tuple[str, str], TrackedAction] = {}

    @property
    def window_seconds(self) -> float:
        return self._window

    def track(self, action: str, resource_name: str) -> None:
        """Record an own action and schedule its removal."""
        key = action_key(action, resource_name)
        if key not in self._actions:
            self._actions[key] = TrackedAction(
                action=action, resource_name=resource_name, inserted_at=self._clock()
            )
        self._scheduler(self._window, lambda: self._expire(key))
        logger.debug("Tracking own action %s on %s for %ss", action, resource_name, self._window)

    def is_own_action(self, action: str | None, resource_name: str | None) -> bool:
        """Membership test on the composite key."""
        if not action:
            return False
        key = action_key(action, resource_name)
        tracked = self._actions.get(key)
        if tracked is None:
            return False
        # timers can lag behind a busy loop
        if self._clock() - tracked.inserted_at >= self._window:
            self._expire(key)
            return False
        return True

    def tracked(self) -> list[TrackedAction]:
        return list(self._actions.values())

    def clear(self) -> None:
        """Forget everything (session teardown). Pending timers become no-ops."""
        self._actions = {}

    def _expire(self, key: tuple[str, str]) -> None:
        self._actions.pop(key, None)
