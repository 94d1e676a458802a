"""Pytest fixtures for testing registry-authz."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from registry_authz.config._config import AuthzConfig
from registry_authz.controller._controller import AccessController
from registry_authz.testing._backend import FakeBackend

__all__ = ["access_controller", "authz_config", "fake_backend", "isolated_authz_state"]


@pytest.fixture()
def authz_config() -> AuthzConfig:
    """Provide a default ``AuthzConfig`` (realm ``"origin"``, no token realm).

    Example::

        def test_realm(authz_config):
            assert authz_config.realm == "origin"
    """
    return AuthzConfig()


@pytest.fixture()
def fake_backend() -> FakeBackend:
    """Provide a fresh ``FakeBackend`` that allows everything by default."""
    return FakeBackend()


@pytest.fixture()
def access_controller(authz_config: AuthzConfig, fake_backend: FakeBackend) -> AccessController:
    """Provide an ``AccessController`` wired to ``fake_backend``.

    Example::

        def test_pull(access_controller, fake_backend):
            fake_backend.deny("ns/app", "get")
            assert_challenged(access_controller, bearer_request("t"), [pull("ns/app")])
    """
    return AccessController(authz_config, backend_factory=fake_backend.factory())


@pytest.fixture()
def isolated_authz_state() -> Generator[AuthzConfig, None, None]:
    """Pytest fixture that isolates the global authz config for each test.

    Example::

        def test_something(isolated_authz_state):
            configure(realm="test")
    """
    from registry_authz.testing._isolation import isolated_authz

    with isolated_authz() as config:
        yield config
