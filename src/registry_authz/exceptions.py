"""Exception hierarchy for registry-authz."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Literal

__all__ = [
    "AccessDenied",
    "AuthChallenge",
    "BackendError",
    "ChallengingError",
    "CredentialInvalid",
    "CredentialRequired",
    "MalformedRequestError",
    "MalformedScope",
    "NamespaceRequired",
    "RegistryAuthError",
    "UnsupportedAction",
    "UnsupportedResource",
]


class RegistryAuthError(Exception):
    """Base exception for all registry-authz errors."""


# ---------------------------------------------------------------------------
# Challenging errors
# ---------------------------------------------------------------------------


class ChallengingError(RegistryAuthError):
    """An authorization failure the client can fix by retrying with credentials.

    Subclasses are converted into an :class:`AuthChallenge` carrying a
    ``WWW-Authenticate`` header before they reach the HTTP layer.
    """


class CredentialRequired(ChallengingError):
    """No usable credential was found on the request.

    Example::

        try:
            extract_credential(None)
        except CredentialRequired as exc:
            print(exc)  # "authorization header required"
    """

    def __init__(self, message: str = "authorization header required") -> None:
        super().__init__(message)


class CredentialInvalid(ChallengingError):
    """A credential was supplied but could not be decoded."""

    def __init__(self, message: str = "failed to decode credentials") -> None:
        super().__init__(message)


class AccessDenied(ChallengingError):
    """The authorization backend refused the requested operation.

    Attributes:
        reason: The backend's explanation, when it gave one.

    Example::

        try:
            verify_prune_access(backend, group="image.openshift.io")
        except AccessDenied as exc:
            log.warning("denied: %s", exc.reason)
    """

    def __init__(self, *, reason: str = "", message: str = "access denied") -> None:
        self.reason = reason
        super().__init__(message)


# ---------------------------------------------------------------------------
# Non-challenging errors
# ---------------------------------------------------------------------------


class MalformedRequestError(RegistryAuthError):
    """The request itself is malformed or unsupported.

    These never produce a challenge: retrying with other credentials
    cannot fix them.
    """


class NamespaceRequired(MalformedRequestError):
    """A repository name had no namespace, or an empty namespace or name.

    Attributes:
        resource_name: The offending repository name.
    """

    def __init__(self, resource_name: str = "") -> None:
        self.resource_name = resource_name
        super().__init__("repository namespace required")


class UnsupportedAction(MalformedRequestError):
    """The action is not defined for the resource type.

    Attributes:
        resource_type: The resource type of the access record.
        action: The unsupported action.
    """

    def __init__(self, *, resource_type: str = "", action: str = "") -> None:
        self.resource_type = resource_type
        self.action = action
        super().__init__("unsupported action")


class UnsupportedResource(MalformedRequestError):
    """The access record names a resource type the engine does not know.

    Attributes:
        resource_type: The unknown resource type.
    """

    def __init__(self, *, resource_type: str = "") -> None:
        self.resource_type = resource_type
        super().__init__("unsupported resource")


class MalformedScope(MalformedRequestError):
    """A registry token scope could not be parsed.

    Attributes:
        scope: The offending scope item.
    """

    def __init__(self, scope: str = "", *, reason: str = "expected type:name:actions") -> None:
        self.scope = scope
        super().__init__(f"malformed scope {scope!r}: {reason}")


# ---------------------------------------------------------------------------
# Backend errors
# ---------------------------------------------------------------------------


class BackendError(RegistryAuthError):
    """The authorization backend could not answer.

    Unauthorized and forbidden statuses are normalized to
    :class:`AccessDenied` by the access checks; every other backend
    error propagates unchanged and surfaces as a server-side failure.

    Attributes:
        status: The HTTP status returned by the backend, or ``None`` if
            the request never got a response.

    Example::

        raise BackendError("connection refused")
        raise BackendError("forbidden", status=403)
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)

    @property
    def is_unauthorized(self) -> bool:
        return self.status == 401

    @property
    def is_forbidden(self) -> bool:
        return self.status == 403


# ---------------------------------------------------------------------------
# Challenge
# ---------------------------------------------------------------------------


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class AuthChallenge(RegistryAuthError):
    """An authorization failure rendered as a ``WWW-Authenticate`` challenge.

    A single type tagged by ``scheme``: ``"basic"`` challenges carry the
    registry realm and the underlying error message, ``"bearer"``
    challenges direct the client at a token realm and optional service.
    See RFC 6750 section 3 and the registry token authentication docs.

    Attributes:
        scheme: ``"basic"`` or ``"bearer"``.
        realm: The realm advertised to the client.
        service: The token service (bearer challenges only).
        error: The underlying authorization error.

    Example::

        challenge = AuthChallenge.basic("origin", AccessDenied())
        challenge.header_value()  # 'Basic realm="origin",error="access denied"'
    """

    def __init__(
        self,
        *,
        scheme: Literal["basic", "bearer"],
        realm: str,
        error: BaseException | None,
        service: str | None = None,
    ) -> None:
        if scheme not in ("basic", "bearer"):
            raise ValueError(f"scheme must be 'basic' or 'bearer', got {scheme!r}")
        self.scheme = scheme
        self.realm = realm
        self.service = service
        self.error = error
        super().__init__(str(error) if error is not None else "authorization required")

    @classmethod
    def basic(cls, realm: str, error: BaseException | None) -> AuthChallenge:
        return cls(scheme="basic", realm=realm, error=error)

    @classmethod
    def bearer(
        cls, realm: str, error: BaseException | None, *, service: str | None = None
    ) -> AuthChallenge:
        return cls(scheme="bearer", realm=realm, error=error, service=service)

    def header_value(self) -> str:
        """Render the ``WWW-Authenticate`` header value."""
        if self.scheme == "bearer":
            value = f"Bearer realm={_quote(self.realm)}"
            if self.service:
                value += f",service={_quote(self.service)}"
            return value
        value = f"Basic realm={_quote(self.realm)}"
        if self.error is not None:
            value += f",error={_quote(str(self.error))}"
        return value

    def set_headers(self, headers: MutableMapping[str, str]) -> None:
        """Set the challenge header on a mutable response header mapping."""
        headers["WWW-Authenticate"] = self.header_value()
