"""AuthorizedContext: what a successful authorization pass hands back."""

from __future__ import annotations

from dataclasses import dataclass, field

from registry_authz._ledger import DeferredErrorLedger
from registry_authz._types import ClusterBackend, Decision, RepositoryIdentity

__all__ = ["AuthorizedContext"]


@dataclass(frozen=True, slots=True)
class AuthorizedContext:
    """Carries the outcome of an authorization pass to the registry.

    Attributes:
        backend: The backend handle authenticated as the caller. Later
            registry operations reuse it to act on the caller's behalf.
        deferred_errors: Pull failures retained as cross-repository
            mount artifacts. Informational only: the pass succeeded.
        decisions: One decision per evaluated access record, in order.
        auth_performed: Always ``True``; lets downstream code tell an
            authorized request from one that never went through the
            controller.

    Example::

        ctx = controller.authorize(request, records)
        if ctx.has_deferred_errors:
            log.debug("cross-mount pulls: %s", list(ctx.deferred_errors))
    """

    backend: ClusterBackend
    deferred_errors: DeferredErrorLedger = field(default_factory=DeferredErrorLedger)
    decisions: tuple[Decision, ...] = ()
    auth_performed: bool = True

    @property
    def has_deferred_errors(self) -> bool:
        return not self.deferred_errors.is_empty

    def deferred_error_for(self, identity: RepositoryIdentity | str) -> BaseException | None:
        """Return the retained pull error for *identity*, if any."""
        return self.deferred_errors.get(identity)
