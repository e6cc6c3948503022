"""Kubernetes cluster resource manager.

Uses the official kubernetes client. Namespaces are the per-user
namespaces; volumes are cluster-scoped PersistentVolumes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from nsprune.cluster.base import ClusterResourceManager
from nsprune.core.errors import ClusterUnavailable, DeleteFailed
from nsprune.models.resource import ResourceKind

if TYPE_CHECKING:
    from nsprune.core.config import PruneConfig

logger = logging.getLogger(__name__)

# Errors that can surface from a kubernetes API call
_API_ERRORS = (ApiException, HTTPError)


def _describe(error: Exception) -> str:
    if isinstance(error, ApiException):
        return f"HTTP {error.status} {error.reason}"
    return str(error)


def load_core_v1(kubeconfig: str | None = None) -> client.CoreV1Api:
    """Build a CoreV1Api client.

    In-cluster configuration is tried first; outside a cluster the
    kubeconfig (explicit path or the default location) is used.

    Args:
        kubeconfig: Optional kubeconfig path.

    Returns:
        Configured CoreV1Api instance.

    Raises:
        ClusterUnavailable: If no usable cluster configuration is found.
    """
    try:
        config.load_incluster_config()
        logger.debug("Using in-cluster kubernetes configuration")
    except config.ConfigException:
        try:
            config.load_kube_config(config_file=kubeconfig)
            logger.debug("Using kubeconfig %s", kubeconfig or "(default)")
        except (config.ConfigException, OSError) as e:
            raise ClusterUnavailable(f"No kubernetes configuration available: {e}") from e
    return client.CoreV1Api()


class KubernetesClusterManager(ClusterResourceManager):
    """Cluster manager for a live Kubernetes cluster."""

    def __init__(
        self,
        api: client.CoreV1Api,
        timeout_seconds: float = 30.0,
        lenient_existence_checks: bool = False,
    ) -> None:
        """Initialize the manager.

        Args:
            api: CoreV1Api client to issue calls with.
            timeout_seconds: Per-request timeout.
            lenient_existence_checks: Coerce existence-check errors to False.
        """
        super().__init__(lenient_existence_checks=lenient_existence_checks)
        self._api = api
        self._timeout = timeout_seconds

    @classmethod
    def from_config(cls, prune_config: PruneConfig) -> KubernetesClusterManager:
        """Create a manager from the application configuration."""
        return cls(
            load_core_v1(prune_config.kubeconfig),
            timeout_seconds=prune_config.timeout_seconds,
            lenient_existence_checks=prune_config.lenient_existence_checks,
        )

    def list_namespace_names(self) -> list[str]:
        """List all namespace names.

        Raises:
            ClusterUnavailable: If the API call fails.
        """
        try:
            namespaces = self._api.list_namespace(_request_timeout=self._timeout)
        except _API_ERRORS as e:
            raise ClusterUnavailable(f"Cannot list namespaces: {_describe(e)}") from e
        return [item.metadata.name for item in namespaces.items]

    def _exists(self, kind: ResourceKind, name: str, read: Any) -> bool:
        try:
            read(name, _request_timeout=self._timeout)
        except ApiException as e:
            if e.status == 404:
                return False
            return self._lookup_failed(kind, name, e)
        except HTTPError as e:
            return self._lookup_failed(kind, name, e)
        return True

    def _lookup_failed(self, kind: ResourceKind, name: str, error: Exception) -> bool:
        if self.lenient_existence_checks:
            logger.warning(
                "Lookup of %s %s failed (%s); treating it as absent",
                kind.value,
                name,
                _describe(error),
            )
            return False
        msg = f"Cannot look up {kind.value} {name}: {_describe(error)}"
        raise ClusterUnavailable(msg) from error

    def namespace_exists(self, name: str) -> bool:
        """Check whether a namespace exists."""
        return self._exists(ResourceKind.NAMESPACE, name, self._api.read_namespace)

    def volume_exists(self, name: str) -> bool:
        """Check whether a persistent volume exists."""
        return self._exists(ResourceKind.VOLUME, name, self._api.read_persistent_volume)

    def _delete(self, kind: ResourceKind, name: str, delete: Any) -> None:
        try:
            delete(name, _request_timeout=self._timeout)
        except ApiException as e:
            if e.status == 404:
                logger.debug("%s %s already absent", kind.value.capitalize(), name)
                return
            raise DeleteFailed(kind.value, name, _describe(e)) from e
        except HTTPError as e:
            raise DeleteFailed(kind.value, name, _describe(e)) from e
        logger.debug("Deleted %s %s", kind.value, name)

    def delete_namespace(self, name: str) -> None:
        """Delete a namespace.

        Raises:
            DeleteFailed: If the API rejects the call.
        """
        self._delete(ResourceKind.NAMESPACE, name, self._api.delete_namespace)

    def delete_volume(self, name: str) -> None:
        """Delete a persistent volume.

        Raises:
            DeleteFailed: If the API rejects the call.
        """
        self._delete(ResourceKind.VOLUME, name, self._api.delete_persistent_volume)
