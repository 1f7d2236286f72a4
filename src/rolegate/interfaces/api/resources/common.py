"""Helpers shared by API resources."""

from typing import Any

import falcon
import falcon.asgi

from rolegate.application.dto.actor import Actor
from rolegate.domain.exceptions import ValidationError


def require_user(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> Actor | None:
    """Return the acting user, or answer 401 and return None."""
    user = getattr(req.context, "user", None)
    if not user:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
    return user


async def read_object(req: falcon.asgi.Request) -> dict[str, Any]:
    """Read a JSON object body; an empty body reads as {}."""
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Expected a JSON object")
    return body
