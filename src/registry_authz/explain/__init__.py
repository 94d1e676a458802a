"""Explain/dry-run mode: structured insight into authorization decisions."""

from registry_authz.explain._access import explain_authorization
from registry_authz.explain._models import AuthorizationExplanation, RecordEvaluation

__all__ = [
    "AuthorizationExplanation",
    "RecordEvaluation",
    "explain_authorization",
]
