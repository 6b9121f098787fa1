"""Permission resolver - current-session permission state and lookups."""

import json
import logging
from collections.abc import Iterable

from dockdash.application.ports import LocalStorage, RoleService
from dockdash.domain.entities import SessionUser
from dockdash.domain.exceptions import DockDashError
from dockdash.domain.value_objects import PermissionTree, ResolverState
from dockdash.domain.value_objects.default_permissions import (
    FALLBACK_ROLE,
    full_access_permissions,
)

logger = logging.getLogger(__name__)

PERMISSIONS_STORAGE_KEY = "userPermissions"
ROLE_STORAGE_KEY = "userRole"

WIDGETS_PATH = "dashboard.canViewWidgets"
ALLOWED_MODELS_PATH = "aiChat.allowedModels"


class PermissionResolver:
    """Owns the session's permission tree and answers lookups synchronously.

    Lookups never await. Until a tree is present (from cache or the backend)
    ``has_permission`` answers ``default_when_unloaded``, which is an explicit
    fail-open policy by default so rendering is never blocked on a slow fetch.
    The backend stays the enforcement point.
    """

    def __init__(
        self,
        role_service: RoleService,
        storage: LocalStorage,
        *,
        default_when_unloaded: bool = True,
        fallback_full_access: bool = True,
    ) -> None:
        self._role_service = role_service
        self._storage = storage
        self._default_when_unloaded = default_when_unloaded
        self._fallback_full_access = fallback_full_access
        self._permissions: PermissionTree | None = None
        self._role: str | None = None
        self._state = ResolverState.UNINITIALIZED
        self._loading = False
        self._generation = 0

    @property
    def permissions(self) -> PermissionTree | None:
        return self._permissions

    @property
    def role(self) -> str | None:
        return self._role

    @property
    def state(self) -> ResolverState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def default_when_unloaded(self) -> bool:
        return self._default_when_unloaded

    async def load(self, user: SessionUser | None) -> None:
        """Load permissions for user; ``None`` clears state and cache."""
        self._generation += 1
        generation = self._generation
        if user is None:
            self.clear()
            return

        self._state = ResolverState.LOADING
        self._loading = True
        if self._hydrate_from_cache():
            self._loading = False

        try:
            snapshot = await self._role_service.get_my_permissions()
        except DockDashError as e:
            if generation == self._generation:
                logger.warning(
                    "Error fetching permissions for user %s, applying fallback: %s",
                    user.id,
                    e,
                )
                self._apply_fallback()
            return
        finally:
            if generation == self._generation:
                self._loading = False
                self._state = ResolverState.READY

        if generation != self._generation:
            logger.debug("Discarding permissions fetched for superseded session")
            return
        if snapshot is None or snapshot.permissions.is_empty:
            logger.warning("No permissions found for user %s, applying fallback", user.id)
            self._apply_fallback()
            return

        self._permissions = snapshot.permissions
        self._role = snapshot.role
        self._write_cache()

    def reset(self) -> None:
        """Drop in-memory permissions and role; the cached copy is kept.

        A fetch still in flight is discarded when it returns.
        """
        self._generation += 1
        self._permissions = None
        self._role = None
        self._loading = False
        self._state = ResolverState.UNINITIALIZED

    def clear(self) -> None:
        """Drop permissions, role and cached copies (logout)."""
        self.reset()
        self._storage.remove(PERMISSIONS_STORAGE_KEY, ROLE_STORAGE_KEY)

    def has_permission(self, path: str) -> bool:
        """True iff the leaf at path is exactly boolean True."""
        if self._permissions is None:
            return self._default_when_unloaded
        return self._permissions.get(path) is True

    def has_any(self, paths: Iterable[str]) -> bool:
        return any(self.has_permission(p) for p in paths)

    def has_all(self, paths: Iterable[str]) -> bool:
        return all(self.has_permission(p) for p in paths)

    def can_access_module(self, module: str) -> bool:
        return self.has_permission(f"{module}.canView")

    def can_view_widget(self, name: str) -> bool:
        if self._permissions is None:
            return False
        widgets = self._permissions.get(WIDGETS_PATH)
        return isinstance(widgets, tuple) and name in widgets

    def allowed_models(self) -> list[str]:
        """Allowed AI model ids. Empty means every model; the caller decides."""
        if self._permissions is None:
            return []
        models = self._permissions.get(ALLOWED_MODELS_PATH)
        return list(models) if isinstance(models, tuple) else []

    def _hydrate_from_cache(self) -> bool:
        raw_permissions = self._storage.get(PERMISSIONS_STORAGE_KEY)
        role = self._storage.get(ROLE_STORAGE_KEY)
        if not raw_permissions or not role:
            return False
        try:
            tree = PermissionTree.from_dict(json.loads(raw_permissions))
        except ValueError as e:
            logger.error("Error parsing cached permissions: %s", e)
            return False
        self._permissions = tree
        self._role = role
        return True

    def _write_cache(self) -> None:
        if self._permissions is None or self._role is None:
            return
        self._storage.set(PERMISSIONS_STORAGE_KEY, json.dumps(self._permissions.to_dict()))
        self._storage.set(ROLE_STORAGE_KEY, self._role)

    def _apply_fallback(self) -> None:
        if self._fallback_full_access:
            self._permissions = full_access_permissions()
            self._role = FALLBACK_ROLE
        else:
            self._permissions = PermissionTree()
            self._role = None
