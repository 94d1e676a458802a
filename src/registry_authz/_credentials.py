"""Credential extraction from the ``Authorization`` request header."""

from __future__ import annotations

import base64

from registry_authz._types import RequestLike
from registry_authz.exceptions import CredentialInvalid, CredentialRequired

__all__ = ["ANONYMOUS_TOKEN", "credential_from_request", "extract_credential"]

# Token handed to anonymous clients by the registry's token endpoint.
ANONYMOUS_TOKEN = "anonymous"


def extract_credential(authorization: str | None) -> str:
    """Return the API credential carried by an ``Authorization`` header.

    Bearer headers carry the credential directly: either an API token or
    a token issued by the registry's token endpoint. Basic headers carry
    it as the password. The anonymous token and an empty bearer value
    both yield ``""``, meaning an anonymous caller.

    Args:
        authorization: The raw header value, or ``None`` if absent.

    Returns:
        The credential; ``""`` for anonymous callers.

    Raises:
        CredentialRequired: If the header is missing, malformed or uses
            an unknown scheme.
        CredentialInvalid: If a basic header cannot be decoded or has an
            empty password.

    Example::

        extract_credential("Bearer sha256~abc")  # "sha256~abc"
        extract_credential("Bearer anonymous")   # ""
    """
    if not authorization:
        raise CredentialRequired()

    scheme, sep, value = authorization.partition(" ")
    if not sep:
        raise CredentialRequired()

    scheme = scheme.lower()
    if scheme == "bearer":
        if value == ANONYMOUS_TOKEN:
            return ""
        return value

    if scheme == "basic":
        password = _basic_password(value)
        if not password:
            raise CredentialInvalid()
        return password

    raise CredentialRequired()


def credential_from_request(request: RequestLike) -> str:
    """Extract the credential from a request's ``Authorization`` header."""
    return extract_credential(request.headers.get("Authorization"))


def _basic_password(value: str) -> str | None:
    """Decode ``base64(user:password)``; ``None`` if it does not decode."""
    try:
        decoded = base64.b64decode(value, validate=True).decode("utf-8")
    except ValueError:
        return None
    _, sep, password = decoded.partition(":")
    if not sep:
        return None
    return password
