"""Data models for explain/dry-run output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["AuthorizationExplanation", "RecordEvaluation"]


@dataclass(frozen=True, slots=True)
class RecordEvaluation:
    """How a single access record was decided.

    Attributes:
        scope: The record as ``type:name:action``.
        verb: The backend verb the record mapped to, if any.
        outcome: ``"allowed"``, ``"denied"``, ``"error"``, ``"deferred"``
            or ``"skipped"``.
        error: Message of the error attached to the decision, if any.
        surfaced: True for the deferred pull whose error the pass raised
            at reconciliation; its outcome then reads ``"denied"`` or
            ``"error"`` by the kind of error.
    """

    scope: str
    verb: str | None
    outcome: str
    error: str | None
    surfaced: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return {
            "scope": self.scope,
            "verb": self.verb,
            "outcome": self.outcome,
            "error": self.error,
            "surfaced": self.surfaced,
        }


@dataclass(frozen=True, slots=True)
class AuthorizationExplanation:
    """Explanation of one authorization pass.

    Attributes:
        allowed: Whether the pass as a whole succeeded.
        records: Per-record evaluations, in the order they were decided.
            A pass that fails stops early, so later records are absent.
        deferred_errors: Retained cross-mount pull errors by repository.
        error_type: Class name of the error the pass raised, if any.
        error: Message of the error the pass raised, if any.
        challenge: The ``WWW-Authenticate`` value the error renders to,
            if it is a challenge.
    """

    allowed: bool
    records: list[RecordEvaluation]
    deferred_errors: dict[str, str]
    error_type: str | None = None
    error: str | None = None
    challenge: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return {
            "allowed": self.allowed,
            "records": [r.to_dict() for r in self.records],
            "deferred_errors": dict(self.deferred_errors),
            "error_type": self.error_type,
            "error": self.error,
            "challenge": self.challenge,
        }

    def __str__(self) -> str:
        """Return a human-readable multi-line explanation."""
        verdict = "ALLOWED" if self.allowed else "DENIED"
        lines: list[str] = [f"Authorization: {verdict}"]
        if not self.records:
            lines.append("  (no access records: caller verification only)")
        for r in self.records:
            verb = f" [{r.verb}]" if r.verb else ""
            suffix = f": {r.error}" if r.error else ""
            marker = " (surfaced at reconciliation)" if r.surfaced else ""
            lines.append(f"  - {r.scope}{verb} -> {r.outcome.upper()}{marker}{suffix}")
        if self.deferred_errors:
            lines.append("  Deferred (cross-mount):")
            for repository, message in self.deferred_errors.items():
                lines.append(f"    {repository}: {message}")
        if self.error_type is not None:
            lines.append(f"  Error: {self.error_type}: {self.error}")
        if self.challenge is not None:
            lines.append(f"  WWW-Authenticate: {self.challenge}")
        return "\n".join(lines)
