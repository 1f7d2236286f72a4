"""Health check endpoints."""

import falcon.asgi

from rolegate import __version__


class HealthResource:
    """Health and readiness endpoints."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok", "version": __version__}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness."""
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
