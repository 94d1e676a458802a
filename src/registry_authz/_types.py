"""Shared data types, protocols and type aliases for registry-authz."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol, runtime_checkable

from registry_authz.exceptions import NamespaceRequired

__all__ = [
    "ADMIN",
    "REPOSITORY",
    "AccessRecord",
    "AccessReview",
    "BackendFactory",
    "ClusterBackend",
    "Decision",
    "Outcome",
    "RepositoryIdentity",
    "RequestLike",
    "Verb",
]

# Resource types the registry hands to the access controller.
REPOSITORY = "repository"
ADMIN = "admin"

# Verbs sent to the authorization backend.
Verb = Literal["get", "update", "prune"]

# Per-record outcomes recorded during an authorization pass.
Outcome = Literal["allowed", "denied", "error", "deferred", "skipped"]


@dataclass(frozen=True, slots=True)
class AccessRecord:
    """One requested operation on one resource.

    Attributes:
        resource_type: ``"repository"`` or ``"admin"``.
        resource_name: For repositories, ``"namespace/name"``.
        action: ``"pull"``, ``"push"``, ``"*"`` or, for admin, ``"prune"``.

    Example::

        AccessRecord("repository", "myns/myapp", "push")
    """

    resource_type: str
    resource_name: str
    action: str

    def __str__(self) -> str:
        return f"{self.resource_type}:{self.resource_name}:{self.action}"


@dataclass(frozen=True, slots=True)
class RepositoryIdentity:
    """A repository split into its namespace and name.

    Example::

        identity = RepositoryIdentity.parse("myns/myapp")
        assert str(identity) == "myns/myapp"
    """

    namespace: str
    name: str

    @classmethod
    def parse(cls, resource_name: str) -> RepositoryIdentity:
        """Split *resource_name* on the first ``/``.

        Raises:
            NamespaceRequired: If there is no ``/`` or either part is empty.
        """
        namespace, sep, name = resource_name.partition("/")
        if not sep or not namespace or not name:
            raise NamespaceRequired(resource_name)
        return cls(namespace=namespace, name=name)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True)
class AccessReview:
    """Answer of a backend permission check."""

    allowed: bool
    reason: str = ""


@dataclass(frozen=True, slots=True)
class Decision:
    """The outcome of evaluating a single access record.

    Attributes:
        record: The access record that was evaluated.
        outcome: ``"allowed"``, ``"denied"``, ``"error"``, ``"deferred"``
            (a pull failure held for cross-mount reconciliation) or
            ``"skipped"`` (a repeated prune check).
        verb: The backend verb the record mapped to, if any.
        error: The error for non-allowed outcomes.
    """

    record: AccessRecord
    outcome: Outcome
    verb: Verb | None = None
    error: BaseException | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome in ("allowed", "skipped")


@runtime_checkable
class RequestLike(Protocol):
    """Structural type for inbound HTTP requests.

    Flask, Werkzeug and Starlette requests all satisfy it; so does any
    object with a ``headers`` mapping.
    """

    @property
    def headers(self) -> Mapping[str, str]: ...


@runtime_checkable
class ClusterBackend(Protocol):
    """Authenticated handle on the cluster authorization API.

    Each method is one synchronous round trip. Failures raise
    :class:`~registry_authz.exceptions.BackendError` carrying the HTTP
    status when one was received.
    """

    def get_current_user(self) -> Any: ...

    def review_namespaced_access(
        self,
        namespace: str,
        *,
        verb: str,
        group: str,
        resource: str,
        resource_name: str,
    ) -> AccessReview: ...

    def review_cluster_access(
        self,
        *,
        verb: str,
        group: str,
        resource: str,
    ) -> AccessReview: ...


# Mints a backend handle authenticated with the given credential.
# An empty credential means anonymous access.
BackendFactory = Callable[[str], ClusterBackend]
