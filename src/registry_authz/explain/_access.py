"""explain_authorization(): explain how a request's access records were decided."""

from __future__ import annotations

from collections.abc import Iterable

from registry_authz._types import AccessRecord, Decision, RequestLike
from registry_authz.controller._controller import AccessController
from registry_authz.exceptions import AuthChallenge, ChallengingError, RegistryAuthError
from registry_authz.explain._models import AuthorizationExplanation, RecordEvaluation

__all__ = ["explain_authorization"]


def _evaluation(decision: Decision, raised: BaseException | None = None) -> RecordEvaluation:
    surfaced = (
        raised is not None
        and decision.outcome == "deferred"
        and decision.error is not None
        and decision.error in (raised, raised.__cause__)
    )
    outcome = decision.outcome
    if surfaced:
        outcome = "denied" if isinstance(decision.error, ChallengingError) else "error"
    return RecordEvaluation(
        scope=str(decision.record),
        verb=decision.verb,
        outcome=outcome,
        error=str(decision.error) if decision.error is not None else None,
        surfaced=surfaced,
    )


def explain_authorization(
    controller: AccessController,
    request: RequestLike,
    access_records: Iterable[AccessRecord] = (),
) -> AuthorizationExplanation:
    """Run one authorization pass and describe it instead of raising.

    Uses the same controller, backend and decision path as
    :meth:`AccessController.authorize`, so the verdict is identical.
    Authorization errors are captured in the explanation; errors outside
    the registry-authz hierarchy still propagate.

    Args:
        controller: The access controller to explain.
        request: The inbound request.
        access_records: The operations requested.

    Returns:
        An ``AuthorizationExplanation`` with per-record outcomes and the
        overall verdict.

    Example::

        explanation = explain_authorization(controller, request, parse_scope(scope))
        print(explanation)
    """
    decisions: list[Decision] = []
    try:
        context = controller.authorize(request, access_records, on_decision=decisions.append)
    except RegistryAuthError as exc:
        return AuthorizationExplanation(
            allowed=False,
            records=[_evaluation(d, exc) for d in decisions],
            deferred_errors={},
            error_type=type(exc).__name__,
            error=str(exc),
            challenge=exc.header_value() if isinstance(exc, AuthChallenge) else None,
        )

    return AuthorizationExplanation(
        allowed=True,
        records=[_evaluation(d) for d in context.decisions],
        deferred_errors={repo: str(err) for repo, err in context.deferred_errors.items()},
    )
