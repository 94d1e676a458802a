"""HTTP status and header mapping shared by the web integrations."""

from __future__ import annotations

from registry_authz.exceptions import (
    AuthChallenge,
    BackendError,
    ChallengingError,
    MalformedRequestError,
    RegistryAuthError,
)

__all__ = ["error_response"]


def error_response(exc: RegistryAuthError) -> tuple[int, dict[str, str], dict[str, str]]:
    """Map a registry-authz error to ``(status, headers, body)``.

    - ``AuthChallenge`` -> 401 with ``WWW-Authenticate``
    - ``ChallengingError`` raised unwrapped -> 401, no challenge
    - ``MalformedRequestError`` -> 400
    - ``BackendError`` -> 502
    - anything else -> 500
    """
    headers: dict[str, str] = {}
    if isinstance(exc, AuthChallenge):
        exc.set_headers(headers)
        status = 401
    elif isinstance(exc, ChallengingError):
        status = 401
    elif isinstance(exc, MalformedRequestError):
        status = 400
    elif isinstance(exc, BackendError):
        status = 502
    else:
        status = 500
    return status, headers, {"detail": str(exc)}
