"""Authentication API resource."""

import falcon.asgi

from rolegate.application.dto.representations import auth_result_to_dict
from rolegate.application.use_cases.auth.authenticate import AuthenticateUseCase
from rolegate.interfaces.api.resources.common import read_object


class LoginResource:
    """POST /v1/auth/login - exchange credentials for a token."""

    def __init__(self, authenticate: AuthenticateUseCase) -> None:
        self._authenticate = authenticate

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await read_object(req)
        result = await self._authenticate.execute(
            str(body.get("email") or ""), str(body.get("password") or "")
        )
        resp.media = auth_result_to_dict(result)
        resp.status = falcon.HTTP_200 if result.success else falcon.HTTP_401
