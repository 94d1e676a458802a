"""Flask integration for registry-authz."""

from __future__ import annotations

try:
    import flask as _flask_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _flask_check
except ImportError as exc:
    raise ImportError(
        "Flask integration requires flask. Install it with: pip install registry-authz[flask]"
    ) from exc

from registry_authz.integrations.flask._extension import RegistryAuthExtension

__all__ = ["RegistryAuthExtension"]
