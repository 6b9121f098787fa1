"""Domain exceptions."""


class DockDashError(Exception):
    """Base exception for dockdash."""

    pass


class ServiceUnavailable(DockDashError):
    """Dashboard backend could not be reached or returned an unusable reply."""

    pass


class Unauthorized(DockDashError):
    """Session is missing or expired and could not be refreshed."""

    pass


class PermissionDenied(DockDashError):
    """User does not have permission for the requested action."""

    pass


class NotFound(DockDashError):
    """Requested resource was not found."""

    pass


class ValidationError(DockDashError):
    """Validation failed for input data."""

    pass


class SystemRoleProtected(DockDashError):
    """System roles cannot be deleted."""

    pass
