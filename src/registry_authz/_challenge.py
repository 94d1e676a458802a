"""Mapping of authorization errors onto ``WWW-Authenticate`` challenges."""

from __future__ import annotations

from registry_authz.config._config import AuthzConfig
from registry_authz.exceptions import (
    AccessDenied,
    AuthChallenge,
    CredentialInvalid,
    CredentialRequired,
)

__all__ = ["wrap_error"]


def wrap_error(error: BaseException, config: AuthzConfig) -> BaseException:
    """Wrap *error* in an :class:`AuthChallenge` when a challenge applies.

    - ``CredentialRequired``: bearer challenge towards the token realm
      if one is configured, basic challenge otherwise.
    - ``CredentialInvalid`` and ``AccessDenied``: basic challenge.
    - Anything else, including malformed-request and backend errors, is
      returned unchanged and surfaces without a challenge.

    The returned challenge is chained from *error* when raised with
    ``raise wrapped from error``.

    Example::

        raise wrap_error(AccessDenied(), config)
    """
    if isinstance(error, AuthChallenge):
        return error
    if isinstance(error, CredentialRequired):
        if config.token_realm:
            return AuthChallenge.bearer(config.token_realm, error, service=config.token_service)
        return AuthChallenge.basic(config.realm, error)
    if isinstance(error, (CredentialInvalid, AccessDenied)):
        return AuthChallenge.basic(config.realm, error)
    return error
