"""Layered configuration for registry-authz."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

__all__ = [
    "DEFAULT_IMAGE_API_GROUP",
    "DEFAULT_REALM",
    "REALM_KEY",
    "TOKEN_REALM_KEY",
    "AuthzConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]

# Keys of the registry's access-controller options map.
REALM_KEY = "realm"
TOKEN_REALM_KEY = "token-realm"

DEFAULT_REALM = "origin"
DEFAULT_IMAGE_API_GROUP = "image.openshift.io"


@dataclass(frozen=True, slots=True)
class AuthzConfig:
    """Immutable configuration with merge semantics (global -> controller).

    Attributes:
        realm: Realm advertised in basic challenges.
        token_realm: When set, missing credentials produce a bearer
            challenge directing the client at this token endpoint.
        token_service: Service advertised in bearer challenges.
        image_api_group: API group of the image resources checked by
            the backend.
        log_decisions: Emit an INFO summary for every authorization pass.

    Example::

        config = AuthzConfig(token_realm="https://registry.example.com/openshift/token")
        merged = config.merge(realm="registry")
    """

    realm: str = DEFAULT_REALM
    token_realm: str | None = None
    token_service: str | None = None
    image_api_group: str = DEFAULT_IMAGE_API_GROUP
    log_decisions: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.realm, str) or not self.realm:
            raise ValueError(f"realm must be a non-empty string, got {self.realm!r}")
        if self.token_realm is not None and not isinstance(self.token_realm, str):
            raise ValueError(f"token_realm must be a string or None, got {self.token_realm!r}")
        if self.token_service is not None and not isinstance(self.token_service, str):
            raise ValueError(
                f"token_service must be a string or None, got {self.token_service!r}"
            )
        if not isinstance(self.image_api_group, str):
            raise ValueError(
                f"image_api_group must be a string, got {self.image_api_group!r}"
            )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> AuthzConfig:
        """Build a config from the registry's access-controller options.

        A missing or non-string ``realm`` falls back to ``"origin"``. An
        explicitly empty ``realm`` is rejected, since it would render
        ``Basic realm=""``. A missing, empty or non-string ``token-realm``
        disables bearer challenges.

        Raises:
            ValueError: If ``realm`` is configured as an empty string.

        Example::

            config = AuthzConfig.from_options({"realm": "registry", "token-realm": url})
        """
        realm = options.get(REALM_KEY)
        if not isinstance(realm, str):
            realm = DEFAULT_REALM
        elif not realm:
            raise ValueError(f"{REALM_KEY} option must not be empty")
        token_realm = options.get(TOKEN_REALM_KEY)
        if not isinstance(token_realm, str) or not token_realm:
            token_realm = None
        return cls(realm=realm, token_realm=token_realm)

    def merge(
        self,
        *,
        realm: str | None = None,
        token_realm: str | None = None,
        token_service: str | None = None,
        image_api_group: str | None = None,
        log_decisions: bool | None = None,
    ) -> AuthzConfig:
        """Return a new config with non-None overrides applied.

        Args:
            realm: Override for realm (ignored if None).
            token_realm: Override for token_realm (ignored if None).
            token_service: Override for token_service (ignored if None).
            image_api_group: Override for image_api_group (ignored if None).
            log_decisions: Override for log_decisions (ignored if None).

        Returns:
            A new ``AuthzConfig`` with overrides merged.
        """
        return AuthzConfig(
            realm=realm if realm is not None else self.realm,
            token_realm=token_realm if token_realm is not None else self.token_realm,
            token_service=(
                token_service if token_service is not None else self.token_service
            ),
            image_api_group=(
                image_api_group if image_api_group is not None else self.image_api_group
            ),
            log_decisions=log_decisions if log_decisions is not None else self.log_decisions,
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = AuthzConfig()


def get_global_config() -> AuthzConfig:
    """Return the current global configuration."""
    return _global_config


def configure(
    *,
    realm: str | None = None,
    token_realm: str | None = None,
    token_service: str | None = None,
    image_api_group: str | None = None,
    log_decisions: bool | None = None,
) -> AuthzConfig:
    """Update the global configuration by merging overrides.

    Only non-None values are applied. Controllers built without an
    explicit config read the global config at construction time.

    Returns:
        The updated global ``AuthzConfig``.

    Example::

        configure(token_realm="https://registry.example.com/openshift/token")
    """
    global _global_config
    _global_config = _global_config.merge(
        realm=realm,
        token_realm=token_realm,
        token_service=token_service,
        image_api_group=image_api_group,
        log_decisions=log_decisions,
    )
    return _global_config


def _set_global_config(cfg: AuthzConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = AuthzConfig()
