"""Kubernetes backend for registry-authz."""

from __future__ import annotations

try:
    import kubernetes as _kubernetes_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _kubernetes_check
except ImportError as exc:
    raise ImportError(
        "Kubernetes backend requires kubernetes. "
        "Install it with: pip install registry-authz[kubernetes]"
    ) from exc

from registry_authz.backends.kubernetes._backend import (
    KubernetesBackend,
    kubernetes_backend_factory,
    load_base_configuration,
)

__all__ = ["KubernetesBackend", "kubernetes_backend_factory", "load_base_configuration"]
