"""AccessController: decides one registry request's access records."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from typing import Any, NoReturn, cast

from registry_authz._audit import log_access_check, log_deferred_errors, log_pass_summary
from registry_authz._challenge import wrap_error
from registry_authz._checks import evaluate, verify_user
from registry_authz._credentials import credential_from_request
from registry_authz._ledger import DeferredErrorLedger
from registry_authz._types import (
    ADMIN,
    REPOSITORY,
    AccessRecord,
    BackendFactory,
    ClusterBackend,
    Decision,
    RepositoryIdentity,
    RequestLike,
    Verb,
)
from registry_authz.config._config import AuthzConfig, get_global_config
from registry_authz.controller._context import AuthorizedContext
from registry_authz.exceptions import (
    ChallengingError,
    MalformedRequestError,
    UnsupportedAction,
    UnsupportedResource,
)

__all__ = ["AccessController", "resolve_access"]

_REPOSITORY_VERBS: dict[str, Verb] = {
    "push": "update",
    "pull": "get",
    "*": "prune",
}

_ADMIN_VERBS: dict[str, Verb] = {
    "prune": "prune",
}


def resolve_access(record: AccessRecord) -> tuple[RepositoryIdentity | None, Verb]:
    """Map an access record to the repository it names and a backend verb.

    Repository names are validated before the action, so a malformed
    name wins over an unsupported action.

    Returns:
        ``(identity, verb)``; *identity* is ``None`` for admin records.

    Raises:
        NamespaceRequired: If a repository name lacks a namespace or name.
        UnsupportedAction: If the action is unknown for the resource type.
        UnsupportedResource: If the resource type is unknown.

    Example::

        resolve_access(AccessRecord("repository", "ns/app", "push"))
        # (RepositoryIdentity(namespace="ns", name="app"), "update")
    """
    if record.resource_type == REPOSITORY:
        identity = RepositoryIdentity.parse(record.resource_name)
        verb = _REPOSITORY_VERBS.get(record.action)
        if verb is None:
            raise UnsupportedAction(resource_type=record.resource_type, action=record.action)
        return identity, verb

    if record.resource_type == ADMIN:
        verb = _ADMIN_VERBS.get(record.action)
        if verb is None:
            raise UnsupportedAction(resource_type=record.resource_type, action=record.action)
        return None, verb

    raise UnsupportedResource(resource_type=record.resource_type)


class _AuthorizationPass:
    """Mutable state of one pass; never shared between requests."""

    __slots__ = ("decisions", "ledger", "on_decision", "push_checks", "verified_prune")

    def __init__(self, on_decision: Callable[[Decision], None] | None) -> None:
        self.decisions: list[Decision] = []
        self.ledger = DeferredErrorLedger()
        self.push_checks: set[str] = set()
        self.verified_prune = False
        self.on_decision = on_decision

    def record(self, decision: Decision) -> None:
        self.decisions.append(decision)
        if self.on_decision is not None:
            self.on_decision(decision)


class AccessController:
    """Authorizes registry requests against the cluster authorization API.

    For every request the controller extracts the caller's credential,
    mints a backend handle authenticated with it, and checks each access
    record the registry supplied:

    - ``repository`` + ``push`` checks ``update`` on the image stream
      layers; ``pull`` checks ``get``; ``*`` checks prune access.
    - ``admin`` + ``prune`` checks cluster-wide ``delete`` on images, at
      most once per request.

    A failed pull check does not fail the request immediately: it is held
    in a :class:`DeferredErrorLedger` and only surfaces if no successful
    push to the same repository was requested alongside it.

    Args:
        config: Challenge realms and backend settings. Defaults to the
            global config at construction time.
        backend_factory: Callable ``(credential) -> ClusterBackend``.

    Example::

        controller = AccessController(backend_factory=kubernetes_backend_factory())
        try:
            ctx = controller.authorize(request, [AccessRecord("repository", "ns/app", "pull")])
        except AuthChallenge as challenge:
            challenge.set_headers(response.headers)
    """

    def __init__(
        self,
        config: AuthzConfig | None = None,
        *,
        backend_factory: BackendFactory,
    ) -> None:
        self._config = config if config is not None else get_global_config()
        self._backend_factory = backend_factory

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any],
        *,
        backend_factory: BackendFactory,
    ) -> AccessController:
        """Build a controller from the registry's access-controller options.

        Example::

            AccessController.from_options(
                {"realm": "origin", "token-realm": "https://registry.example.com/openshift/token"},
                backend_factory=factory,
            )
        """
        return cls(AuthzConfig.from_options(options), backend_factory=backend_factory)

    @property
    def config(self) -> AuthzConfig:
        return self._config

    def wrap_error(self, error: BaseException) -> BaseException:
        """Wrap *error* in a challenge when one applies, chaining the original."""
        wrapped = wrap_error(error, self._config)
        if wrapped is not error:
            wrapped.__cause__ = error
        return wrapped

    def _fail(self, error: BaseException) -> NoReturn:
        raise self.wrap_error(error)

    def authorize(
        self,
        request: RequestLike,
        access_records: Iterable[AccessRecord] = (),
        *,
        on_decision: Callable[[Decision], None] | None = None,
    ) -> AuthorizedContext:
        """Decide whether the request may perform all of *access_records*.

        Args:
            request: The inbound request; only its ``Authorization``
                header is read.
            access_records: The operations requested. An empty sequence
                is a bare capability probe and only verifies the caller.
            on_decision: Optional callback invoked with each decision as
                it is made, including those of a pass that fails.

        Returns:
            An ``AuthorizedContext`` holding the authenticated backend
            and any retained cross-mount pull errors.

        Raises:
            AuthChallenge: For missing or invalid credentials and denied
                access.
            MalformedRequestError: For malformed repository names and
                unsupported actions or resources.
            BackendError: When the backend fails for a reason other than
                unauthorized or forbidden.
        """
        state = _AuthorizationPass(on_decision)
        try:
            context = self._authorize(request, tuple(access_records), state)
        except Exception as exc:
            if self._config.log_decisions:
                log_pass_summary(decisions=state.decisions, deferred={}, error=exc)
            raise
        if self._config.log_decisions:
            log_pass_summary(decisions=context.decisions, deferred=context.deferred_errors.as_dict())
        return context

    def _authorize(
        self,
        request: RequestLike,
        records: tuple[AccessRecord, ...],
        state: _AuthorizationPass,
    ) -> AuthorizedContext:
        try:
            credential = credential_from_request(request)
            backend = self._backend_factory(credential)
        except ChallengingError as exc:
            self._fail(exc)

        # A bare "GET /v2/" probe, as sent by "docker login".
        if not records:
            try:
                verify_user(backend)
            except ChallengingError as exc:
                self._fail(exc)
            return AuthorizedContext(backend=backend)

        for record in records:
            log_access_check(record)
            self._check_record(backend, record, state)

        # Only a pull paired with a successful push to the same repository
        # is kept as a cross-mount artifact; any other pull failure stands.
        for repository, error in state.ledger.items():
            if repository not in state.push_checks:
                raise error

        if not state.ledger.is_empty:
            log_deferred_errors(state.ledger.items())

        return AuthorizedContext(
            backend=backend,
            deferred_errors=state.ledger,
            decisions=tuple(state.decisions),
        )

    def _check_record(
        self,
        backend: ClusterBackend,
        record: AccessRecord,
        state: _AuthorizationPass,
    ) -> None:
        try:
            identity, verb = resolve_access(record)
        except MalformedRequestError as exc:
            state.record(Decision(record=record, outcome="error", error=exc))
            raise

        if verb == "prune" and state.verified_prune:
            state.record(Decision(record=record, outcome="skipped", verb=verb))
            return

        decision = evaluate(
            backend, record, identity, verb, group=self._config.image_api_group
        )

        if decision.allowed:
            state.record(decision)
            if verb == "prune":
                state.verified_prune = True
            elif verb == "update":
                state.push_checks.add(str(identity))
            return

        error = cast(BaseException, decision.error)
        if verb == "get" and identity is not None:
            state.ledger.add(identity, self.wrap_error(error))
            state.record(dataclasses.replace(decision, outcome="deferred"))
            return

        state.record(decision)
        self._fail(error)
