"""Mapping of domain errors to HTTP responses."""

import logging

import falcon
import falcon.asgi

from rolegate.domain.exceptions import (
    DataIntegrityError,
    DuplicateEmail,
    DuplicateName,
    NotFound,
    PermissionDenied,
    RoleGateError,
    RoleInUse,
    TeamInUse,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = {
    ValidationError: falcon.HTTP_400,
    PermissionDenied: falcon.HTTP_403,
    NotFound: falcon.HTTP_404,
    DuplicateName: falcon.HTTP_409,
    DuplicateEmail: falcon.HTTP_409,
    RoleInUse: falcon.HTTP_409,
    TeamInUse: falcon.HTTP_409,
}


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: RoleGateError, params
) -> None:
    """Translate a RoleGateError raised by a resource into a JSON error response."""
    if isinstance(ex, DataIntegrityError):
        logger.error("Data integrity error on %s %s: %s", req.method, req.path, ex)
        resp.status = falcon.HTTP_500
        resp.media = {"error": "Data integrity error", "kind": type(ex).__name__}
        return
    status = next(
        (s for cls, s in _STATUS.items() if isinstance(ex, cls)), falcon.HTTP_500
    )
    resp.status = status
    resp.media = {"error": str(ex), "kind": type(ex).__name__}


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    """Log anything else and answer 500 without leaking details."""
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}
