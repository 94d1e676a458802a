"""Configuration module for registry-authz."""

from __future__ import annotations

from registry_authz.config._config import AuthzConfig, configure, get_global_config

__all__ = ["AuthzConfig", "configure", "get_global_config"]
