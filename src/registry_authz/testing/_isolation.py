"""Isolation utilities for global authz state in tests."""

from __future__ import annotations

import contextlib
from collections.abc import Generator

from registry_authz.config._config import (
    AuthzConfig,
    _reset_global_config,  # pyright: ignore[reportPrivateUsage]
    _set_global_config,  # pyright: ignore[reportPrivateUsage]
    get_global_config,
)

__all__ = ["isolated_authz"]


@contextlib.contextmanager
def isolated_authz(*, config: AuthzConfig | None = None) -> Generator[AuthzConfig, None, None]:
    """Context manager that provides isolated global authz configuration.

    Saves the current global config, installs *config* (or the
    defaults), yields the effective config and restores the saved config
    on exit, even if the body raises.

    Args:
        config: Optional config to use during the isolated block.
            If None, resets to defaults.

    Yields:
        The effective global ``AuthzConfig``.

    Example::

        with isolated_authz(config=AuthzConfig(realm="test")) as cfg:
            assert get_global_config().realm == "test"
        # Original config is restored
    """
    saved_config = get_global_config()
    try:
        if config is not None:
            _set_global_config(config)
        else:
            _reset_global_config()
        yield get_global_config()
    finally:
        _set_global_config(saved_config)
