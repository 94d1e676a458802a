"""Point checks against the cluster authorization backend."""

from __future__ import annotations

from registry_authz._audit import log_backend_failure, log_denial
from registry_authz._types import (
    AccessRecord,
    AccessReview,
    ClusterBackend,
    Decision,
    RepositoryIdentity,
    Verb,
)
from registry_authz.exceptions import AccessDenied, BackendError, ChallengingError

__all__ = [
    "IMAGE_LAYERS_RESOURCE",
    "IMAGES_RESOURCE",
    "evaluate",
    "verify_image_stream_access",
    "verify_prune_access",
    "verify_user",
]

IMAGE_LAYERS_RESOURCE = "imagestreams/layers"
IMAGES_RESOURCE = "images"


def _denied_from(operation: str, exc: BackendError) -> AccessDenied | None:
    log_backend_failure(operation, exc)
    if exc.is_unauthorized or exc.is_forbidden:
        return AccessDenied(reason=str(exc))
    return None


def _check_review(operation: str, review: AccessReview) -> None:
    if not review.allowed:
        log_denial(operation, review.reason)
        raise AccessDenied(reason=review.reason)


def verify_user(backend: ClusterBackend) -> None:
    """Verify that the backend accepts the caller's credential.

    Used for bare capability probes (``GET /v2/``) which carry no access
    records.

    Raises:
        AccessDenied: If the backend answers unauthorized or forbidden.
        BackendError: For any other backend failure.
    """
    try:
        backend.get_current_user()
    except BackendError as exc:
        denied = _denied_from("get current user", exc)
        if denied is None:
            raise
        raise denied from exc


def verify_image_stream_access(
    backend: ClusterBackend,
    identity: RepositoryIdentity,
    verb: str,
    *,
    group: str,
) -> None:
    """Check *verb* on the layers of one image stream.

    Asks the backend whether the caller may *verb* the
    ``imagestreams/layers`` resource named ``identity.name`` in
    ``identity.namespace``.

    Args:
        backend: Authenticated backend handle.
        identity: The repository being accessed.
        verb: ``"get"`` for pulls, ``"update"`` for pushes.
        group: API group of the image resources.

    Raises:
        AccessDenied: If the check is refused, or the backend answers
            unauthorized or forbidden.
        BackendError: For any other backend failure.

    Example::

        verify_image_stream_access(backend, RepositoryIdentity("ns", "app"), "get",
                                   group="image.openshift.io")
    """
    operation = f"{verb} {IMAGE_LAYERS_RESOURCE} {identity}"
    try:
        review = backend.review_namespaced_access(
            identity.namespace,
            verb=verb,
            group=group,
            resource=IMAGE_LAYERS_RESOURCE,
            resource_name=identity.name,
        )
    except BackendError as exc:
        denied = _denied_from(operation, exc)
        if denied is None:
            raise
        raise denied from exc
    _check_review(operation, review)


def verify_prune_access(backend: ClusterBackend, *, group: str) -> None:
    """Check cluster-wide ``delete`` on images, the permission behind pruning.

    Raises:
        AccessDenied: If the check is refused, or the backend answers
            unauthorized or forbidden.
        BackendError: For any other backend failure.
    """
    operation = f"delete {IMAGES_RESOURCE}"
    try:
        review = backend.review_cluster_access(
            verb="delete",
            group=group,
            resource=IMAGES_RESOURCE,
        )
    except BackendError as exc:
        denied = _denied_from(operation, exc)
        if denied is None:
            raise
        raise denied from exc
    _check_review(operation, review)


def evaluate(
    backend: ClusterBackend,
    record: AccessRecord,
    identity: RepositoryIdentity | None,
    verb: Verb,
    *,
    group: str,
) -> Decision:
    """Run the check for one access record and fold the result into a Decision.

    Challenge-worthy refusals become ``"denied"`` decisions and backend
    failures become ``"error"`` decisions; neither is raised, so the
    caller decides which failures are terminal. Errors that are not
    backend or authorization errors propagate.

    Args:
        backend: Authenticated backend handle.
        record: The access record being evaluated.
        identity: The repository, required for ``"get"`` and ``"update"``.
        verb: The backend verb the record maps to.
        group: API group of the image resources.

    Returns:
        A ``Decision`` for *record*.
    """
    try:
        if verb == "prune":
            verify_prune_access(backend, group=group)
        else:
            if identity is None:
                raise ValueError(f"verb {verb!r} requires a repository identity")
            verify_image_stream_access(backend, identity, verb, group=group)
    except ChallengingError as exc:
        return Decision(record=record, outcome="denied", verb=verb, error=exc)
    except BackendError as exc:
        return Decision(record=record, outcome="error", verb=verb, error=exc)
    return Decision(record=record, outcome="allowed", verb=verb)
