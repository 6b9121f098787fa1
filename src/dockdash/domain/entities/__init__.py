"""Domain entities."""

from dockdash.domain.entities.notification import Notification
from dockdash.domain.entities.role import Role
from dockdash.domain.entities.session_user import SessionUser
from dockdash.domain.entities.tracked_action import TrackedAction, action_key

__all__ = [
    "Notification",
    "Role",
    "SessionUser",
    "TrackedAction",
    "action_key",
]
