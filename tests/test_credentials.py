"""Tests for _credentials.py: credential extraction."""

from __future__ import annotations

import base64

import pytest

from registry_authz._credentials import (
    ANONYMOUS_TOKEN,
    credential_from_request,
    extract_credential,
)
from registry_authz.exceptions import CredentialInvalid, CredentialRequired
from registry_authz.testing import FakeRequest, basic_request, bearer_request


def _basic(raw: str) -> str:
    return "Basic " + base64.b64encode(raw.encode()).decode("ascii")


class TestBearer:
    def test_returns_token(self):
        assert extract_credential("Bearer sha256~abc") == "sha256~abc"

    def test_scheme_is_case_insensitive(self):
        assert extract_credential("bearer abc") == "abc"
        assert extract_credential("BEARER abc") == "abc"

    def test_anonymous_sentinel(self):
        assert extract_credential(f"Bearer {ANONYMOUS_TOKEN}") == ""

    def test_empty_token_is_anonymous(self):
        """An empty bearer value is indistinguishable from the anonymous token."""
        assert extract_credential("Bearer ") == ""
        assert extract_credential("Bearer ") == extract_credential("Bearer anonymous")

    def test_token_with_spaces_is_kept_whole(self):
        assert extract_credential("Bearer a b") == "a b"


class TestBasic:
    def test_password_is_credential(self):
        assert extract_credential(_basic("user:secret")) == "secret"

    def test_password_may_contain_colons(self):
        assert extract_credential(_basic("user:a:b")) == "a:b"

    def test_empty_password_is_invalid(self):
        with pytest.raises(CredentialInvalid):
            extract_credential(_basic("user:"))

    def test_missing_colon_is_invalid(self):
        with pytest.raises(CredentialInvalid):
            extract_credential(_basic("useronly"))

    def test_bad_base64_is_invalid(self):
        with pytest.raises(CredentialInvalid):
            extract_credential("Basic !!!not-base64!!!")

    def test_non_utf8_is_invalid(self):
        value = base64.b64encode(b"\xff\xfe:\xff").decode("ascii")
        with pytest.raises(CredentialInvalid):
            extract_credential(f"Basic {value}")


class TestMissing:
    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header(self, header):
        with pytest.raises(CredentialRequired):
            extract_credential(header)

    def test_no_separator(self):
        with pytest.raises(CredentialRequired):
            extract_credential("Bearer")

    def test_unknown_scheme(self):
        with pytest.raises(CredentialRequired):
            extract_credential("Digest abc")


class TestFromRequest:
    def test_bearer_request(self):
        assert credential_from_request(bearer_request("tok")) == "tok"

    def test_basic_request(self):
        assert credential_from_request(basic_request("u", "p")) == "p"

    def test_no_header(self):
        with pytest.raises(CredentialRequired):
            credential_from_request(FakeRequest({}))
