"""registry-authz testing utilities: fake backend, factories, assertions, fixtures.

Provides test helpers for verifying registry authorization:

- **FakeBackend**: An in-memory ``ClusterBackend`` with per-repository rules.
- **Factories**: ``pull``, ``push``, ``prune``, ``admin_prune`` records and
  ``bearer_request`` / ``basic_request`` requests.
- **Assertion helpers**: ``assert_authorized``, ``assert_challenged``,
  ``assert_not_challenged``.
- **Fixtures**: ``authz_config``, ``fake_backend``, ``access_controller``,
  ``isolated_authz_state``.

Example::

    from registry_authz.testing import FakeBackend, assert_challenged, bearer_request, pull

    def test_pull_denied(access_controller, fake_backend):
        fake_backend.deny("ns/app", "get")
        assert_challenged(access_controller, bearer_request("t"), [pull("ns/app")], scheme="basic")
"""

from registry_authz.testing._assertions import (
    assert_authorized,
    assert_challenged,
    assert_not_challenged,
)
from registry_authz.testing._backend import BackendCall, FakeBackend
from registry_authz.testing._fixtures import (
    access_controller,
    authz_config,
    fake_backend,
    isolated_authz_state,
)
from registry_authz.testing._isolation import isolated_authz
from registry_authz.testing._records import (
    FakeRequest,
    admin_prune,
    basic_request,
    bearer_request,
    prune,
    pull,
    push,
)

__all__ = [
    "BackendCall",
    "FakeBackend",
    "FakeRequest",
    "access_controller",
    "admin_prune",
    "assert_authorized",
    "assert_challenged",
    "assert_not_challenged",
    "authz_config",
    "basic_request",
    "bearer_request",
    "fake_backend",
    "isolated_authz",
    "isolated_authz_state",
    "prune",
    "pull",
    "push",
]
