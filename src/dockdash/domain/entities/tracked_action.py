"""Tracked own action - a mutating action the current actor just issued."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TrackedAction:
    """Composite key of action and resource, with insertion time (monotonic)."""

    action: str
    resource_name: str
    inserted_at: float

    @property
    def key(self) -> tuple[str, str]:
        return action_key(self.action, self.resource_name)


def action_key(action: str | None, resource_name: str | None) -> tuple[str, str]:
    """Composite key used for membership tests."""
    return (action or "", resource_name or "")
