"""Import fixtures from registry_authz.testing for test discovery."""

from registry_authz.testing._fixtures import (
    access_controller,
    authz_config,
    fake_backend,
    isolated_authz_state,
)

__all__ = ["access_controller", "authz_config", "fake_backend", "isolated_authz_state"]
