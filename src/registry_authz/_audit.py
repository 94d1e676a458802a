"""Audit logging for access checks and authorization passes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from registry_authz._types import AccessRecord, Decision

__all__ = [
    "log_access_check",
    "log_backend_failure",
    "log_deferred_errors",
    "log_denial",
    "log_pass_summary",
]

logger = logging.getLogger("registry_authz")


def log_access_check(record: AccessRecord) -> None:
    """Log, at DEBUG, that an access record is about to be checked."""
    logger.debug(
        "Checking for access to %s:%s:%s",
        record.resource_type,
        record.resource_name,
        record.action,
    )


def log_backend_failure(operation: str, exc: BaseException) -> None:
    """Log a failed backend round trip."""
    logger.error("Authorization backend error during %s: %s", operation, exc)


def log_denial(operation: str, reason: str) -> None:
    """Log a backend refusal together with its reason."""
    logger.error("Access denied during %s: %s", operation, reason or "<no reason given>")


def log_deferred_errors(errors: Iterable[tuple[str, BaseException]]) -> None:
    """Log pull failures retained as possible cross-repository mounts.

    Each entry goes to the ``registry_authz.deferred`` sub-logger so
    operators can enable it independently of the main logger.
    """
    deferred_logger = logging.getLogger("registry_authz.deferred")
    for repository, exc in errors:
        deferred_logger.debug("Deferring error for %s: %s", repository, exc)


def log_pass_summary(
    *,
    decisions: Sequence[Decision],
    deferred: Mapping[str, BaseException],
    error: BaseException | None = None,
) -> None:
    """Log one authorization pass.

    Logging levels:
    - INFO: Summary (record count, verdict, deferred error count)
    - DEBUG: One line per decision

    Example::

        log_pass_summary(decisions=decisions, deferred=ledger)
    """
    verdict = "allowed" if error is None else f"refused ({type(error).__name__})"
    logger.info(
        "Authorization pass: %d record(s) %s, %d deferred error(s)",
        len(decisions),
        verdict,
        len(deferred),
    )

    if logger.isEnabledFor(logging.DEBUG):
        for decision in decisions:
            logger.debug(
                "  %s -> %s%s",
                decision.record,
                decision.outcome,
                f" ({decision.error})" if decision.error is not None else "",
            )
