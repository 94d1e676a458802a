"""registry-authz pytest plugin -- auto-discovered via pytest11 entry point.

This module is registered as a pytest plugin in ``pyproject.toml``::

    [project.entry-points.pytest11]
    registry_authz = "registry_authz.testing._plugin"

All fixtures defined here are automatically available in projects
that install registry-authz.
"""

from __future__ import annotations

# Re-export fixtures so they are auto-discovered by pytest.
from registry_authz.testing._fixtures import (  # noqa: F401
    access_controller,
    authz_config,
    fake_backend,
    isolated_authz_state,
)

__all__ = ["access_controller", "authz_config", "fake_backend", "isolated_authz_state"]
