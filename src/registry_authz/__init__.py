"""registry-authz: authorization decisions for a container image registry.

Decides whether a caller, identified by the credential on the request,
may pull, push or prune a repository, and converts refusals into
``WWW-Authenticate`` challenges. Permission checks are delegated to a
cluster authorization backend.

Example::

    from registry_authz import AccessController, AccessRecord, AuthChallenge
    from registry_authz.backends.kubernetes import kubernetes_backend_factory

    controller = AccessController.from_options(
        {"realm": "origin"}, backend_factory=kubernetes_backend_factory()
    )
    try:
        ctx = controller.authorize(request, [AccessRecord("repository", "ns/app", "pull")])
    except AuthChallenge as challenge:
        challenge.set_headers(response.headers)
"""

from importlib.metadata import PackageNotFoundError, version

from registry_authz._credentials import extract_credential
from registry_authz._ledger import DeferredErrorLedger
from registry_authz._scope import parse_scope
from registry_authz._types import (
    AccessRecord,
    AccessReview,
    BackendFactory,
    ClusterBackend,
    Decision,
    RepositoryIdentity,
    RequestLike,
)
from registry_authz.config._config import AuthzConfig, configure
from registry_authz.controller._context import AuthorizedContext
from registry_authz.controller._controller import AccessController
from registry_authz.exceptions import (
    AccessDenied,
    AuthChallenge,
    BackendError,
    ChallengingError,
    CredentialInvalid,
    CredentialRequired,
    MalformedRequestError,
    MalformedScope,
    NamespaceRequired,
    RegistryAuthError,
    UnsupportedAction,
    UnsupportedResource,
)

try:
    __version__ = version("registry-authz")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "AccessController",
    "AccessDenied",
    "AccessRecord",
    "AccessReview",
    "AuthChallenge",
    "AuthorizedContext",
    "AuthzConfig",
    "BackendError",
    "BackendFactory",
    "ChallengingError",
    "ClusterBackend",
    "CredentialInvalid",
    "CredentialRequired",
    "Decision",
    "DeferredErrorLedger",
    "MalformedRequestError",
    "MalformedScope",
    "NamespaceRequired",
    "RegistryAuthError",
    "RepositoryIdentity",
    "RequestLike",
    "UnsupportedAction",
    "UnsupportedResource",
    "configure",
    "extract_credential",
    "parse_scope",
]
