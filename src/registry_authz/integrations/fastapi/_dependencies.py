"""FastAPI dependencies for registry-authz authorization."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from fastapi import Depends, Request
from fastapi.concurrency import run_in_threadpool

from registry_authz._types import AccessRecord
from registry_authz.controller._context import AuthorizedContext
from registry_authz.controller._controller import AccessController

__all__ = ["RegistryAuthDep", "make_authorizer"]

RecordsProvider = Callable[[Request], Iterable[AccessRecord]]


def _no_records(request: Request) -> Iterable[AccessRecord]:
    return ()


def make_authorizer(
    controller: AccessController,
    records_provider: RecordsProvider | None = None,
) -> Callable[[Request], Any]:
    """Build the async dependency function running *controller* per request.

    The pass blocks on backend round trips, so it runs in Starlette's
    thread pool rather than on the event loop.

    Args:
        controller: The access controller to run.
        records_provider: A callable ``(request) -> access records``.
            Defaults to no records (a caller verification probe).
    """
    provider = records_provider if records_provider is not None else _no_records

    async def _resolve(request: Request) -> AuthorizedContext:
        records = list(provider(request))
        context = await run_in_threadpool(controller.authorize, request, records)
        request.state.registry_authz_context = context
        return context

    return _resolve


def RegistryAuthDep(
    controller: AccessController,
    records_provider: RecordsProvider | None = None,
) -> Any:
    """FastAPI dependency that authorizes the request.

    Resolves to the ``AuthorizedContext`` of the pass. Authorization
    errors propagate to the handlers installed by
    :func:`install_error_handlers`.

    Use directly as a default parameter value in route signatures.

    Args:
        controller: The access controller to run.
        records_provider: A callable ``(request) -> access records``.

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        def pull_records(request: Request) -> list[AccessRecord]:
            name = request.path_params["name"]
            return [AccessRecord("repository", name, "pull")]

        @app.get("/v2/{name:path}/manifests/{reference}")
        async def get_manifest(
            name: str,
            reference: str,
            ctx: AuthorizedContext = RegistryAuthDep(controller, pull_records),
        ) -> dict:
            ...
    """
    return Depends(make_authorizer(controller, records_provider))
