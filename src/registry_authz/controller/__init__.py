"""Controller module for registry-authz: the per-request decision engine."""

from __future__ import annotations

from registry_authz.controller._context import AuthorizedContext
from registry_authz.controller._controller import AccessController, resolve_access

__all__ = ["AccessController", "AuthorizedContext", "resolve_access"]
