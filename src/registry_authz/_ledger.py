"""DeferredErrorLedger: pull failures held back during one authorization pass."""

from __future__ import annotations

from collections.abc import Iterator

from registry_authz._types import RepositoryIdentity

__all__ = ["DeferredErrorLedger"]


class DeferredErrorLedger:
    """Ordered mapping of ``"namespace/name"`` to a tentative pull error.

    A registry mounts a blob across repositories by pulling from the
    source and pushing to the target in one request, so a failed pull
    check may be explained by a push in the same request. The controller
    records pull failures here and reconciles them once every access
    record has been checked.

    One ledger lives for exactly one authorization pass. Adding a second
    error for the same repository replaces the first but keeps its
    position.

    Example::

        ledger = DeferredErrorLedger()
        ledger.add(RepositoryIdentity("ns", "app"), challenge)
        for repository, error in ledger.items():
            ...
    """

    __slots__ = ("_errors",)

    def __init__(self) -> None:
        self._errors: dict[str, BaseException] = {}

    def add(self, identity: RepositoryIdentity, error: BaseException) -> None:
        """Record *error* as the latest pull failure for *identity*."""
        self._errors[str(identity)] = error

    def get(self, identity: RepositoryIdentity | str) -> BaseException | None:
        """Return the deferred error for *identity*, or ``None``."""
        return self._errors.get(str(identity))

    def items(self) -> list[tuple[str, BaseException]]:
        """Return ``(repository, error)`` pairs in insertion order."""
        return list(self._errors.items())

    def as_dict(self) -> dict[str, BaseException]:
        """Return a copy of the ledger as a plain dict."""
        return dict(self._errors)

    @property
    def is_empty(self) -> bool:
        return not self._errors

    def __contains__(self, identity: object) -> bool:
        return str(identity) in self._errors

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __repr__(self) -> str:
        entries = ", ".join(f"{repo!r}: {err!r}" for repo, err in self._errors.items())
        return f"DeferredErrorLedger({{{entries}}})"
