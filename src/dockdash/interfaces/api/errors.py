"""Domain error to HTTP status mapping."""

import logging

import falcon
import falcon.asgi

from dockdash.domain.exceptions import (
    DockDashError,
    NotFound,
    PermissionDenied,
    ServiceUnavailable,
    SystemRoleProtected,
    Unauthorized,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = (
    (Unauthorized, falcon.HTTP_401),
    (PermissionDenied, falcon.HTTP_403),
    (NotFound, falcon.HTTP_404),
    (ValidationError, falcon.HTTP_400),
    (SystemRoleProtected, falcon.HTTP_409),
    (ServiceUnavailable, falcon.HTTP_503),
)


def status_for(error: DockDashError) -> str:
    for exc_type, status in _STATUS:
        if isinstance(error, exc_type):
            return status
    return falcon.HTTP_502


async def handle_domain_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: DockDashError,
    params: dict,
) -> None:
    """Render a DockDashError raised by a resource."""
    resp.status = status_for(ex)
    if resp.status in (falcon.HTTP_502, falcon.HTTP_503):
        logger.warning("%s %s failed: %s", req.method, req.path, ex)
    resp.media = {"error": str(ex) or type(ex).__name__}
