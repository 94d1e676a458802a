"""Flask extension for registry-authz authorization."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from flask import Flask, Request, current_app, g, jsonify, request

from registry_authz._types import AccessRecord
from registry_authz.controller._context import AuthorizedContext
from registry_authz.controller._controller import AccessController
from registry_authz.exceptions import RegistryAuthError
from registry_authz.integrations._responses import error_response

__all__ = ["RegistryAuthExtension"]

RecordsProvider = Callable[[Request], Iterable[AccessRecord]]


def _no_records(request: Request) -> Iterable[AccessRecord]:
    return ()


class RegistryAuthExtension:
    """Flask extension that authorizes registry requests.

    Registers an error handler turning registry-authz errors into HTTP
    responses (401 with ``WWW-Authenticate`` for challenges, 400 for
    malformed requests, 502 for backend failures) and provides an
    ``authorize()`` method that runs the access controller for the
    current request.

    Supports the Flask app-factory pattern via ``init_app()``.

    Args:
        app: Optional Flask application. If provided, calls ``init_app()``
            immediately.
        controller: The access controller to run.
        records_provider: A callable ``(request) -> access records`` used
            when ``authorize()`` is called without explicit records.
            Defaults to no records (a caller verification probe).

    Example::

        app = Flask(__name__)
        authz = RegistryAuthExtension(
            app,
            controller=controller,
            records_provider=lambda req: parse_scope(req.args.get("scope", "")),
        )

        @app.get("/v2/<path:name>/manifests/<reference>")
        def get_manifest(name, reference):
            ctx = authz.authorize([AccessRecord("repository", name, "pull")])
            ...
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        controller: AccessController,
        records_provider: RecordsProvider | None = None,
    ) -> None:
        self._controller = controller
        self._records_provider = records_provider if records_provider is not None else _no_records

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize the extension with a Flask application.

        Stores configuration on ``app.extensions["registry_authz"]`` and
        registers the error handler for registry-authz exceptions.
        """
        app.extensions["registry_authz"] = {
            "controller": self._controller,
            "records_provider": self._records_provider,
        }

        @app.errorhandler(RegistryAuthError)
        def handle_registry_auth_error(exc: RegistryAuthError):  # pyright: ignore[reportUnusedFunction]
            status, headers, body = error_response(exc)
            return jsonify(body), status, headers

    def authorize(self, access_records: Iterable[AccessRecord] | None = None) -> AuthorizedContext:
        """Authorize the current request.

        Must be called within a Flask request context. The resulting
        context is also stored on ``flask.g.registry_authz_context``.

        Args:
            access_records: The operations requested. Defaults to the
                configured ``records_provider``.

        Returns:
            The ``AuthorizedContext`` of the pass.

        Raises:
            RegistryAuthError: Handled by the registered error handler
                when left uncaught in a view.
        """
        ext_state: dict[str, Any] = current_app.extensions["registry_authz"]
        controller: AccessController = ext_state["controller"]

        if access_records is None:
            provider: RecordsProvider = ext_state["records_provider"]
            access_records = provider(request)

        context = controller.authorize(request, access_records)
        g.registry_authz_context = context
        return context
