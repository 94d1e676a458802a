"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from registry_authz.exceptions import RegistryAuthError
from registry_authz.integrations._responses import error_response

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI) -> None:
    """Install exception handlers for registry-authz errors on a FastAPI app.

    Converts authorization exceptions into proper HTTP responses:

    - ``AuthChallenge`` -> 401 Unauthorized with ``WWW-Authenticate``
    - ``MalformedRequestError`` -> 400 Bad Request
    - ``BackendError`` -> 502 Bad Gateway

    Args:
        app: The FastAPI application instance.

    Example::

        app = FastAPI()
        install_error_handlers(app)
    """

    @app.exception_handler(RegistryAuthError)
    async def registry_auth_error_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: RegistryAuthError
    ) -> JSONResponse:
        status, headers, body = error_response(exc)
        return JSONResponse(status_code=status, content=body, headers=headers)
