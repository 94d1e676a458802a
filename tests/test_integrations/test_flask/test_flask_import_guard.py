"""Tests for the Flask import guard."""

from __future__ import annotations

import importlib
import sys
from unittest import mock

import pytest


class TestImportGuard:
    def test_import_error_without_flask(self) -> None:
        with mock.patch.dict(sys.modules):
            for mod in [k for k in sys.modules if k.startswith("registry_authz.integrations.flask")]:
                del sys.modules[mod]
            sys.modules["flask"] = None  # type: ignore[assignment]

            with pytest.raises(ImportError) as exc_info:
                importlib.import_module("registry_authz.integrations.flask")

        assert "pip install registry-authz[flask]" in str(exc_info.value)
