"""FastAPI integration for registry-authz."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install registry-authz[fastapi]"
    ) from exc

from registry_authz.integrations.fastapi._dependencies import RegistryAuthDep, make_authorizer
from registry_authz.integrations.fastapi._errors import install_error_handlers

__all__ = ["RegistryAuthDep", "install_error_handlers", "make_authorizer"]
