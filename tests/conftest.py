"""Shared test fixtures for registry-authz tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from registry_authz.config._config import AuthzConfig, _reset_global_config
from registry_authz.controller._controller import AccessController
from registry_authz.testing._backend import FakeBackend
from registry_authz.testing._records import FakeRequest, bearer_request

TOKEN_REALM = "https://registry.example.com/openshift/token"

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_config() -> Generator[None, None, None]:
    """Every test starts and ends with the default global config."""
    _reset_global_config()
    yield
    _reset_global_config()


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def controller(backend: FakeBackend) -> AccessController:
    """Controller with the default realm and no token realm."""
    return AccessController(AuthzConfig(), backend_factory=backend.factory())


@pytest.fixture()
def token_controller(backend: FakeBackend) -> AccessController:
    """Controller that sends credential-less clients to a token realm."""
    return AccessController(
        AuthzConfig(token_realm=TOKEN_REALM, token_service="registry.example.com"),
        backend_factory=backend.factory(),
    )


@pytest.fixture()
def request_with_token() -> FakeRequest:
    return bearer_request("sha256~token")
