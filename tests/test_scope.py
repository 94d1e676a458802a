"""Tests for _scope.py: registry token scope parsing."""

from __future__ import annotations

import pytest

from registry_authz._scope import parse_scope
from registry_authz._types import AccessRecord
from registry_authz.exceptions import MalformedRequestError, MalformedScope


class TestParseScope:
    def test_single_action(self):
        assert parse_scope("repository:ns/app:pull") == [
            AccessRecord("repository", "ns/app", "pull"),
        ]

    def test_multiple_actions(self):
        assert parse_scope("repository:ns/app:pull,push") == [
            AccessRecord("repository", "ns/app", "pull"),
            AccessRecord("repository", "ns/app", "push"),
        ]

    def test_multiple_scopes(self):
        records = parse_scope("repository:a/src:pull repository:b/dst:push")
        assert records == [
            AccessRecord("repository", "a/src", "pull"),
            AccessRecord("repository", "b/dst", "push"),
        ]

    def test_name_with_registry_port(self):
        assert parse_scope("repository:host:5000/ns/app:pull") == [
            AccessRecord("repository", "host:5000/ns/app", "pull"),
        ]

    def test_wildcard_action(self):
        assert parse_scope("repository:ns/app:*") == [
            AccessRecord("repository", "ns/app", "*"),
        ]

    def test_empty(self):
        assert parse_scope("") == []
        assert parse_scope("   ") == []

    @pytest.mark.parametrize(
        "scope",
        ["repository", "repository:ns/app", ":ns/app:pull", "repository::pull", "repository:ns/app:"],
    )
    def test_malformed(self, scope):
        with pytest.raises(MalformedScope, match="malformed scope") as exc_info:
            parse_scope(scope)
        assert exc_info.value.scope == scope

    def test_malformed_is_a_request_error(self):
        with pytest.raises(MalformedRequestError):
            parse_scope("repository:ns/app")

    def test_empty_action_in_list(self):
        with pytest.raises(MalformedScope, match="empty action"):
            parse_scope("repository:ns/app:pull,,push")
