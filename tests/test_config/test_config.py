"""Tests for AuthzConfig and the global configuration."""

from __future__ import annotations

import dataclasses

import pytest

from registry_authz.config._config import (
    DEFAULT_IMAGE_API_GROUP,
    DEFAULT_REALM,
    AuthzConfig,
    _reset_global_config,
    _set_global_config,
    configure,
    get_global_config,
)


class TestAuthzConfig:
    def test_defaults(self):
        config = AuthzConfig()
        assert config.realm == DEFAULT_REALM == "origin"
        assert config.token_realm is None
        assert config.token_service is None
        assert config.image_api_group == DEFAULT_IMAGE_API_GROUP
        assert config.log_decisions is False

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            AuthzConfig().realm = "x"  # type: ignore[misc]

    def test_empty_realm_rejected(self):
        with pytest.raises(ValueError, match="realm"):
            AuthzConfig(realm="")

    def test_non_string_token_realm_rejected(self):
        with pytest.raises(ValueError, match="token_realm"):
            AuthzConfig(token_realm=42)  # type: ignore[arg-type]

    def test_non_string_token_service_rejected(self):
        with pytest.raises(ValueError, match="token_service"):
            AuthzConfig(token_service=1)  # type: ignore[arg-type]

    def test_non_string_api_group_rejected(self):
        with pytest.raises(ValueError, match="image_api_group"):
            AuthzConfig(image_api_group=None)  # type: ignore[arg-type]


class TestFromOptions:
    def test_empty_options(self):
        config = AuthzConfig.from_options({})
        assert config.realm == "origin"
        assert config.token_realm is None

    def test_realm_and_token_realm(self):
        config = AuthzConfig.from_options(
            {"realm": "registry", "token-realm": "https://r.example.com/token"}
        )
        assert config.realm == "registry"
        assert config.token_realm == "https://r.example.com/token"

    @pytest.mark.parametrize("value", [None, 3, ["x"]])
    def test_invalid_realm_falls_back(self, value):
        assert AuthzConfig.from_options({"realm": value}).realm == "origin"

    def test_empty_realm_option_rejected(self):
        with pytest.raises(ValueError, match="realm option must not be empty"):
            AuthzConfig.from_options({"realm": ""})

    @pytest.mark.parametrize("value", [None, 3, ""])
    def test_invalid_token_realm_disabled(self, value):
        assert AuthzConfig.from_options({"token-realm": value}).token_realm is None

    def test_unknown_keys_ignored(self):
        assert AuthzConfig.from_options({"other": "x"}) == AuthzConfig()


class TestMerge:
    def test_none_keeps_values(self):
        config = AuthzConfig(realm="a", token_realm="t")
        assert config.merge() == config

    def test_overrides(self):
        merged = AuthzConfig().merge(realm="b", log_decisions=True)
        assert merged.realm == "b"
        assert merged.log_decisions is True

    def test_returns_new_instance(self):
        config = AuthzConfig()
        assert config.merge(realm="x") is not config
        assert config.realm == "origin"


class TestGlobalConfig:
    def setup_method(self) -> None:
        _reset_global_config()

    def teardown_method(self) -> None:
        _reset_global_config()

    def test_default(self):
        assert get_global_config() == AuthzConfig()

    def test_configure_merges(self):
        configure(realm="registry")
        result = configure(token_realm="https://r.example.com/token")
        assert result.realm == "registry"
        assert result.token_realm == "https://r.example.com/token"
        assert get_global_config() is result

    def test_set_global_config(self):
        config = AuthzConfig(realm="snapshot")
        _set_global_config(config)
        assert get_global_config() is config

    def test_reset(self):
        configure(realm="x")
        _reset_global_config()
        assert get_global_config().realm == "origin"
