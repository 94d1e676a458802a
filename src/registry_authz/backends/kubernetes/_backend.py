"""ClusterBackend implementation on the official Kubernetes client."""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client, config
from kubernetes.client import AuthorizationV1Api, CustomObjectsApi
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from registry_authz._types import AccessReview, BackendFactory
from registry_authz.exceptions import BackendError

__all__ = [
    "KubernetesBackend",
    "kubernetes_backend_factory",
    "load_base_configuration",
]

_logger = logging.getLogger("registry_authz.backends.kubernetes")

USER_API_GROUP = "user.openshift.io"
USER_API_VERSION = "v1"
CURRENT_USER = "~"


def load_base_configuration() -> client.Configuration:
    """Load cluster connection parameters, in-cluster first, then kubeconfig.

    Raises:
        BackendError: If neither source yields a configuration.
    """
    try:
        config.load_incluster_config()
    except ConfigException:
        try:
            config.load_kube_config()
        except ConfigException as exc:
            raise BackendError(f"failed to load Kubernetes configuration: {exc}") from exc

    return client.Configuration.get_default_copy()


def _configuration_for(base: client.Configuration, credential: str) -> client.Configuration:
    """Copy connection parameters from *base*, dropping its credentials."""
    configuration = client.Configuration()
    configuration.host = base.host
    configuration.ssl_ca_cert = base.ssl_ca_cert
    configuration.verify_ssl = base.verify_ssl
    configuration.proxy = base.proxy
    configuration.no_proxy = getattr(base, "no_proxy", None)
    configuration.proxy_headers = base.proxy_headers
    configuration.connection_pool_maxsize = base.connection_pool_maxsize
    configuration.assert_hostname = getattr(base, "assert_hostname", None)
    configuration.retries = getattr(base, "retries", None)
    configuration.cert_file = None
    configuration.key_file = None
    configuration.username = None
    configuration.password = None
    configuration.refresh_api_key_hook = None
    if credential:
        configuration.api_key = {"authorization": credential}
        configuration.api_key_prefix = {"authorization": "Bearer"}
    else:
        configuration.api_key = {}
        configuration.api_key_prefix = {}
    return configuration


def _backend_error(operation: str, exc: Exception) -> BackendError:
    if isinstance(exc, ApiException):
        return BackendError(f"{operation} failed: {exc.status} {exc.reason}", status=exc.status)
    return BackendError(f"{operation} failed: {exc}")


class KubernetesBackend:
    """Backend handle that talks to the cluster as the caller.

    Permission checks are ``SelfSubjectAccessReview`` requests, so the
    cluster evaluates the credential the client was built with. The user
    lookup reads the caller's own ``users/~`` object.

    Args:
        api_client: A ``kubernetes.client.ApiClient`` authenticated as
            the caller.

    Example::

        backend = KubernetesBackend(client.ApiClient(configuration))
        review = backend.review_cluster_access(
            verb="delete", group="image.openshift.io", resource="images"
        )
    """

    def __init__(self, api_client: client.ApiClient) -> None:
        self._api_client = api_client

    def get_current_user(self) -> Any:
        api = CustomObjectsApi(self._api_client)
        try:
            return api.get_cluster_custom_object(
                USER_API_GROUP, USER_API_VERSION, "users", CURRENT_USER
            )
        except (ApiException, HTTPError) as exc:
            raise _backend_error("get current user", exc) from exc

    def review_namespaced_access(
        self,
        namespace: str,
        *,
        verb: str,
        group: str,
        resource: str,
        resource_name: str,
    ) -> AccessReview:
        resource, _, subresource = resource.partition("/")
        attributes = client.V1ResourceAttributes(
            namespace=namespace,
            verb=verb,
            group=group,
            resource=resource,
            subresource=subresource or None,
            name=resource_name,
        )
        return self._review(attributes)

    def review_cluster_access(self, *, verb: str, group: str, resource: str) -> AccessReview:
        resource, _, subresource = resource.partition("/")
        attributes = client.V1ResourceAttributes(
            verb=verb,
            group=group,
            resource=resource,
            subresource=subresource or None,
        )
        return self._review(attributes)

    def _review(self, attributes: client.V1ResourceAttributes) -> AccessReview:
        body = client.V1SelfSubjectAccessReview(
            spec=client.V1SelfSubjectAccessReviewSpec(resource_attributes=attributes)
        )
        api = AuthorizationV1Api(self._api_client)
        try:
            response = api.create_self_subject_access_review(body)
        except (ApiException, HTTPError) as exc:
            raise _backend_error("SelfSubjectAccessReview", exc) from exc

        status = getattr(response, "status", None)
        allowed = getattr(status, "allowed", None)
        if allowed is None:
            raise BackendError("unexpected SelfSubjectAccessReview response structure")
        reason = getattr(status, "reason", None) or ""
        _logger.debug(
            "Access review namespace=%s verb=%s resource=%s allowed=%s",
            attributes.namespace,
            attributes.verb,
            attributes.resource,
            allowed,
        )
        return AccessReview(allowed=bool(allowed), reason=reason)

    def close(self) -> None:
        self._api_client.close()

    def __enter__(self) -> KubernetesBackend:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def kubernetes_backend_factory(
    base_configuration: client.Configuration | None = None,
) -> BackendFactory:
    """Return a factory minting one caller-authenticated backend per request.

    Connection parameters come from *base_configuration*, or from
    :func:`load_base_configuration` when omitted. The base credentials
    are never used: an empty credential yields an anonymous client.

    Example::

        controller = AccessController(backend_factory=kubernetes_backend_factory())
    """
    base = base_configuration if base_configuration is not None else load_base_configuration()

    def factory(credential: str) -> KubernetesBackend:
        return KubernetesBackend(client.ApiClient(_configuration_for(base, credential)))

    return factory
