"""Parsing of registry token scopes into access records."""

from __future__ import annotations

from registry_authz._types import AccessRecord
from registry_authz.exceptions import MalformedScope

__all__ = ["parse_scope"]


def parse_scope(scope: str) -> list[AccessRecord]:
    """Parse one or more registry token scopes into access records.

    A scope reads ``type:name:action[,action...]``, e.g.
    ``repository:myns/myapp:pull,push``. Repository names may carry a
    registry host with a port (``host:5000/ns/app``), so the type is split
    off the left and the actions off the right. Several scopes are
    separated by spaces.

    Args:
        scope: The scope string; empty means no access records.

    Returns:
        One ``AccessRecord`` per (resource, action), in scope order.

    Raises:
        MalformedScope: If a scope lacks a type, a name or any action.

    Example::

        parse_scope("repository:myns/myapp:pull,push")
        # [AccessRecord("repository", "myns/myapp", "pull"),
        #  AccessRecord("repository", "myns/myapp", "push")]
    """
    records: list[AccessRecord] = []
    for item in scope.split():
        resource_type, sep, remainder = item.partition(":")
        name, sep2, actions = remainder.rpartition(":")
        if not (sep and sep2 and resource_type and name and actions):
            raise MalformedScope(item)
        for action in actions.split(","):
            if not action:
                raise MalformedScope(item, reason="empty action")
            records.append(AccessRecord(resource_type, name, action))
    return records
